"""Handlers responsible for photo uploads and garment categorisation."""

from __future__ import annotations

from aiogram import F, Router
from aiogram.exceptions import TelegramNetworkError
from aiogram.filters import Command
from aiogram.types import Message, ReplyKeyboardRemove

from stylist.bot_service.context import BotContext
from stylist.bot_service.filters import IntakeStateFilter
from stylist.bot_service.formatting import CATEGORY_KEYBOARD
from stylist.bot_service.state_machine import IntakeState
from stylist.imgproc.encode import InvalidImage, PayloadTooLarge, check_size
from stylist.storage.catalog import ClothingCategory

CATEGORY_ALIASES = {
    "top": ClothingCategory.TOPS,
    "shirt": ClothingCategory.TOPS,
    "t-shirt": ClothingCategory.TOPS,
    "blouse": ClothingCategory.TOPS,
    "sweater": ClothingCategory.TOPS,
    "bottom": ClothingCategory.BOTTOMS,
    "pants": ClothingCategory.BOTTOMS,
    "trousers": ClothingCategory.BOTTOMS,
    "jeans": ClothingCategory.BOTTOMS,
    "skirt": ClothingCategory.BOTTOMS,
    "shorts": ClothingCategory.BOTTOMS,
    "shoe": ClothingCategory.SHOES,
    "sneakers": ClothingCategory.SHOES,
    "boots": ClothingCategory.SHOES,
}


def setup(router: Router, context: BotContext) -> None:
    """Register add-item handlers."""

    @router.message(Command("add"))
    async def handle_add_command(message: Message) -> None:
        context.intake.open()
        await message.answer(
            "Send a photo of the item (PNG, JPG or WEBP up to 4MB).",
            reply_markup=ReplyKeyboardRemove(),
        )

    @router.message(Command("cancel"))
    async def handle_cancel(message: Message) -> None:
        if not context.intake.is_open:
            await message.answer("Nothing to cancel.")
            return
        context.intake.close()
        await message.answer("Okay, the item was not added.", reply_markup=ReplyKeyboardRemove())

    @router.message(F.photo)
    async def handle_photo(message: Message) -> None:
        photo = message.photo[-1]
        await _receive_image(message, context, photo.file_id, photo.file_size)

    @router.message(F.document.mime_type.startswith("image/"))
    async def handle_image_document(message: Message) -> None:
        document = message.document
        await _receive_image(message, context, document.file_id, document.file_size)

    @router.message(IntakeStateFilter(context, IntakeState.AWAITING_CATEGORY), F.text, ~F.text.startswith("/"))
    async def handle_category(message: Message) -> None:
        category = _normalize_category(message.text or "")
        if category is None:
            await message.answer(
                "I don't know that category. Pick one on the keyboard.",
                reply_markup=CATEGORY_KEYBOARD,
            )
            return
        try:
            item = context.intake.choose_category(category)
        except (PayloadTooLarge, InvalidImage) as exc:
            await message.answer(f"{exc}\nSend another photo or /cancel.", reply_markup=ReplyKeyboardRemove())
            return
        count = len(context.catalog)
        await message.answer(
            f"Saved to {item.category.value}. You now have {count} item(s). "
            "Send another photo or open /wardrobe to pick an outfit.",
            reply_markup=ReplyKeyboardRemove(),
        )

    @router.message(IntakeStateFilter(context, IntakeState.AWAITING_PHOTO), F.text, ~F.text.startswith("/"))
    async def handle_missing_photo(message: Message) -> None:
        await message.answer("Please send a photo to save, or /cancel.")


async def _receive_image(message: Message, context: BotContext, file_id: str, file_size: int | None) -> None:
    if not context.intake.is_open:
        context.intake.open()

    if file_size is not None:
        try:
            check_size(file_size)
        except PayloadTooLarge as exc:
            context.intake.reject(str(exc))
            await message.answer(f"{exc} Please send a smaller photo.")
            return

    try:
        file_info = await message.bot.get_file(file_id)
        file_stream = await message.bot.download_file(file_info.file_path)
    except TelegramNetworkError:
        await message.answer("Couldn't download the photo from Telegram. Please try again.")
        return

    data = file_stream.read()
    file_stream.close()

    try:
        context.intake.attach_photo(data)
    except (PayloadTooLarge, InvalidImage) as exc:
        await message.answer(f"{exc} Please send another photo.")
        return

    await message.answer("Got it! Which category is this?", reply_markup=CATEGORY_KEYBOARD)


def _normalize_category(raw: str) -> ClothingCategory | None:
    normalized = raw.strip().lower()
    try:
        return ClothingCategory.parse(normalized)
    except ValueError:
        return CATEGORY_ALIASES.get(normalized)
