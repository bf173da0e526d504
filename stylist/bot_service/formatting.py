"""Rendering of the wardrobe, keyboards and markdown replies for Telegram."""

from __future__ import annotations

import html
import re

from aiogram.types import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)

from stylist.storage.catalog import ClothingCategory, ClothingItem, WardrobeCatalog

TELEGRAM_MESSAGE_LIMIT = 4096
TOGGLE_PREFIX = "toggle:"
SUGGEST_CALLBACK = "suggest"
BUTTONS_PER_ROW = 3

CONFIGURATION_ERROR_TEXT = (
    "<b>Configuration Error</b>\n\n"
    "The styling service API key is missing. Please add it to your environment variables to continue.\n\n"
    "Set an environment variable named <code>API_KEY</code> and restart the bot."
)
LOADING_TEXT = "⏳ <b>Mixing and matching...</b>\nYour personal stylist is at work!"
EMPTY_SELECTION_HINT = "Select items from your wardrobe below to create an outfit."

CATEGORY_KEYBOARD = ReplyKeyboardMarkup(
    keyboard=[[KeyboardButton(text=category.value) for category in ClothingCategory]],
    resize_keyboard=True,
    one_time_keyboard=True,
    input_field_placeholder="Choose a category",
)

_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+(.*?)\s*#*\s*$")
_BULLET_RE = re.compile(r"^(\s*)[-*+]\s+")
_RULE_RE = re.compile(r"^\s*([-*_])(\s*\1){2,}\s*$")
_CODE_RE = re.compile(r"`([^`]+)`")
_BOLD_ITALIC_RE = re.compile(r"\*\*\*(?!\s)(.+?)(?<!\s)\*\*\*|___(?!\s)(.+?)(?<!\s)___")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*|__(.+?)__")
_ITALIC_RE = re.compile(r"(?<![\w*])\*(?!\s)(.+?)(?<!\s)\*(?![\w*])")
_LINK_RE = re.compile(r'\[([^\]]+)\]\((https?://[^)\s"]+)\)')
_HTML_TOKEN_RE = re.compile(r"<[^>]*>|&#?\w+;|[^<&]+|[<&]")
_HTML_TAG_RE = re.compile(r"<(/?)([a-zA-Z]+)")


def _is_well_nested(fragment: str) -> bool:
    stack: list[str] = []
    for tag in _HTML_TAG_RE.finditer(fragment):
        closing, name = tag.groups()
        if not closing:
            stack.append(name)
        elif not stack or stack.pop() != name:
            return False
    return not stack


def _inline(text: str) -> str:
    """Convert inline markdown in an already escaped line.

    Markers that would produce crossed tags leave the line unformatted.
    """

    codes: list[str] = []

    def _stash(match: re.Match[str]) -> str:
        codes.append(f"<code>{match.group(1)}</code>")
        return f"\x00{len(codes) - 1}\x00"

    stashed = _CODE_RE.sub(_stash, text)
    converted = _LINK_RE.sub(r'<a href="\2">\1</a>', stashed)
    converted = _BOLD_ITALIC_RE.sub(lambda m: f"<b><i>{m.group(1) or m.group(2)}</i></b>", converted)
    converted = _BOLD_RE.sub(lambda m: f"<b>{m.group(1) or m.group(2)}</b>", converted)
    converted = _ITALIC_RE.sub(r"<i>\1</i>", converted)
    if not _is_well_nested(converted):
        converted = stashed
    return re.sub(r"\x00(\d+)\x00", lambda m: codes[int(m.group(1))], converted)


def markdown_to_telegram_html(markdown: str) -> str:
    """Render model markdown using the HTML subset Telegram accepts."""

    lines: list[str] = []
    in_code = False
    code_lines: list[str] = []
    for raw_line in markdown.splitlines():
        if raw_line.strip().startswith("```"):
            if in_code:
                lines.append("<pre>" + "\n".join(code_lines) + "</pre>")
                code_lines = []
            in_code = not in_code
            continue
        line = html.escape(raw_line, quote=False)
        if in_code:
            code_lines.append(line)
            continue
        if _RULE_RE.match(line):
            lines.append("")
            continue
        heading = _HEADING_RE.match(line)
        if heading:
            lines.append(f"<b>{_inline(heading.group(1))}</b>")
            continue
        bullet = _BULLET_RE.match(line)
        if bullet:
            line = f"{bullet.group(1)}• {line[bullet.end():]}"
        lines.append(_inline(line))
    if in_code:
        lines.append("<pre>" + "\n".join(code_lines) + "</pre>")
    return "\n".join(lines).strip()


def html_to_text(fragment: str) -> str:
    """Strip tags and entities from rendered HTML for a plain-text resend."""

    return html.unescape(re.sub(r"<[^>]*>", "", fragment))


class _HtmlChunker:
    """Collects HTML tokens into chunks, closing and reopening tags at each cut."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.chunks: list[str] = []
        self.open_tags: list[tuple[str, str]] = []
        self.current = ""
        self.has_content = False

    def _closing(self) -> str:
        return "".join(f"</{name}>" for name, _ in reversed(self.open_tags))

    def room(self) -> int:
        return self.limit - len(self.current) - len(self._closing())

    def flush(self) -> None:
        if not self.has_content:
            return
        self.chunks.append(self.current + self._closing())
        self.current = "".join(opening for _, opening in self.open_tags)
        self.has_content = False

    def add_markup(self, token: str) -> None:
        tag = _HTML_TAG_RE.match(token)
        if tag is not None and tag.group(1):
            self._close(tag.group(2), token)
            return
        extra = len(tag.group(2)) + 3 if tag is not None else 0
        if self.has_content and len(token) + extra > self.room():
            self.flush()
        self.current += token
        if tag is None:
            self.has_content = True
        else:
            self.open_tags.append((tag.group(2), token))

    def _close(self, name: str, token: str) -> None:
        if self.open_tags and self.open_tags[-1][0] == name:
            _, opening = self.open_tags.pop()
            # a tag reopened after a cut and closed straight away is dropped
            if not self.has_content and self.current.endswith(opening):
                self.current = self.current[: -len(opening)]
                return
        self.current += token
        self.has_content = True

    def add_text(self, text: str) -> None:
        while text:
            room = self.room()
            if len(text) <= room:
                self.current += text
                self.has_content = True
                return
            if self.has_content and room <= 0:
                self.flush()
                continue
            room = max(room, 1)
            cut = text.rfind(" ", 0, room) + 1 or room
            self.current += text[:cut]
            self.has_content = True
            self.flush()
            text = text[cut:]


def split_message(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> list[str]:
    """Split rendered HTML into chunks that fit Telegram's limit.

    Lines are kept whole where they fit. Tags open at a cut are closed at the
    end of the chunk and reopened at the start of the next one, and tags and
    entities are never cut in half.
    """

    if len(text) <= limit:
        return [text]
    chunker = _HtmlChunker(limit)
    for line in text.split("\n"):
        if chunker.has_content and len(line) + 1 > chunker.room():
            chunker.flush()
        if chunker.has_content:
            chunker.add_text("\n")
        for token in _HTML_TOKEN_RE.findall(line):
            if token[0] in "<&" and len(token) > 1:
                chunker.add_markup(token)
            else:
                chunker.add_text(token)
    chunker.flush()
    return chunker.chunks


def item_label(catalog: WardrobeCatalog, item: ClothingItem) -> str:
    """Return a short label such as ``Tops 2`` for ``item``."""

    for category, items in catalog.grouped():
        if category is item.category:
            return f"{category.value} {items.index(item) + 1}"
    return item.category.value


def render_wardrobe(catalog: WardrobeCatalog) -> str:
    lines = ["<b>My Wardrobe</b>"]
    for category, items in catalog.grouped():
        lines.append("")
        if not items:
            lines.append(f"<b>{category.value}</b>")
            lines.append(f"No {category.value.lower()} yet. Send a photo or use /add to add some!")
            continue
        selected = sum(1 for item in items if catalog.is_selected(item.id))
        lines.append(f"<b>{category.value}</b> ({len(items)} items, {selected} selected)")
    lines.append("")
    selected_total = len(catalog.selected_ids)
    if selected_total:
        lines.append(f"{selected_total} item(s) selected. Tap items to change the selection.")
    else:
        lines.append(EMPTY_SELECTION_HINT)
    return "\n".join(lines)


def wardrobe_keyboard(catalog: WardrobeCatalog, *, loading: bool = False) -> InlineKeyboardMarkup:
    """Build toggle buttons for every item plus the suggestion button."""

    rows: list[list[InlineKeyboardButton]] = []
    for category, items in catalog.grouped():
        row: list[InlineKeyboardButton] = []
        for index, item in enumerate(items, start=1):
            mark = "✅ " if catalog.is_selected(item.id) else ""
            row.append(
                InlineKeyboardButton(
                    text=f"{mark}{category.value} {index}",
                    callback_data=f"{TOGGLE_PREFIX}{item.id}",
                ),
            )
            if len(row) == BUTTONS_PER_ROW:
                rows.append(row)
                row = []
        if row:
            rows.append(row)
    suggest_text = "⏳ Thinking..." if loading else "✨ Get Style Suggestion"
    rows.append([InlineKeyboardButton(text=suggest_text, callback_data=SUGGEST_CALLBACK)])
    return InlineKeyboardMarkup(inline_keyboard=rows)
