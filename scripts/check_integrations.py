"""Run a connectivity check against the styling service."""

from __future__ import annotations

import asyncio
import sys
from typing import Iterable

from stylist.integrations import IntegrationCheckResult, run_all_checks


def _format_result(result: IntegrationCheckResult) -> str:
    status = "✅" if result.success else "❌"
    return f"{status} {result.name}: {result.message}"


def print_results(results: Iterable[IntegrationCheckResult]) -> bool:
    ok = True
    for result in results:
        print(_format_result(result))
        ok = ok and result.success
    return ok


def main() -> None:
    results = asyncio.run(run_all_checks())
    sys.exit(0 if print_results(results) else 1)


if __name__ == "__main__":
    main()
