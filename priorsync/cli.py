"""
Conversion CLI.

Converts a JSON snapshot of the bank API responses into canonical
accounts and transactions printed as JSON on stdout.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import structlog

from priorsync.conversion.config import get_conversion_config
from priorsync.conversion.pipeline import ConversionResult, run_conversion
from priorsync.core.config import get_settings
from priorsync.core.errors import ConversionError
from priorsync.core.logging import configure_logging

logger = structlog.get_logger()


def result_to_json(result: ConversionResult) -> str:
    """Serialize a conversion result in the aggregator's field naming."""
    return json.dumps(
        {
            "accounts": [a.model_dump(mode="json", by_alias=True) for a in result.accounts],
            "transactions": [t.model_dump(mode="json") for t in result.transactions],
        },
        indent=2,
        ensure_ascii=False,
    )


def convert_command(snapshot_path: str, output_path: Optional[str] = None) -> int:
    """Convert one snapshot file."""
    try:
        snapshot = json.loads(Path(snapshot_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Cannot read snapshot: {e}", file=sys.stderr)
        return 1

    try:
        result = run_conversion(
            snapshot.get("cards", []),
            snapshot.get("cardDescriptions", []),
            config=get_conversion_config(),
        )
    except ConversionError:
        logger.exception("cli.conversion_failed", snapshot=snapshot_path)
        return 1

    output = result_to_json(result)
    if output_path:
        Path(output_path).write_text(output + "\n", encoding="utf-8")
    else:
        print(output)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    args = sys.argv[1:] if argv is None else argv
    if not args or args[0] != "convert" or len(args) not in (2, 3):
        print("Usage: python -m priorsync.cli convert <snapshot.json> [output.json]", file=sys.stderr)
        print("\nThe snapshot is a JSON object with 'cards' and 'cardDescriptions' keys.", file=sys.stderr)
        return 1

    settings = get_settings()
    configure_logging(settings.ENV, settings.effective_log_level())
    return convert_command(args[1], args[2] if len(args) > 2 else None)


if __name__ == "__main__":
    sys.exit(main())
