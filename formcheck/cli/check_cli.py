"""
Command-line interface for checking form values against a form configuration.

Usage:
    python -m formcheck.cli.check_cli check --config <form.yaml> --values <values.json> [options]
    python -m formcheck.cli.check_cli rules [--config <form.yaml>]
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from formcheck.adapters import InMemoryFieldSource, InMemoryFieldSurface
from formcheck.core.errors import FormConfigurationError
from formcheck.core.orchestrator import FormValidator
from formcheck.core.rules import FormConfigLoader, RuleRegistry
from formcheck.observability.logger import get_logger
from formcheck.observability.metrics import start_metrics_server

logger = get_logger(__name__)


def load_values(path: str | Path) -> dict[str, Any]:
    """
    Load field values from a JSON or YAML file.

    Args:
        path: File holding a mapping of field name to value

    Returns:
        Mapping of field name to value

    Raises:
        FormConfigurationError: If the file cannot be decoded or does not hold a mapping
    """
    path = Path(path)
    with open(path) as f:
        try:
            if path.suffix == ".json":
                values = json.load(f)
            else:
                values = yaml.safe_load(f)
        except json.JSONDecodeError as e:
            raise FormConfigurationError(f"Invalid JSON in {path}: {e}")
        except yaml.YAMLError as e:
            raise FormConfigurationError(f"Invalid YAML in {path}: {e}")

    if not isinstance(values, dict):
        raise FormConfigurationError(f"Values file must contain a mapping: {path}")
    return values


def check_form(config_path: str | Path, values: dict[str, Any]) -> dict[str, Any]:
    """
    Run a full form check against in-memory values.

    Args:
        config_path: Form configuration YAML
        values: Field values

    Returns:
        Report with the submission outcome and every field's result
    """
    config = FormConfigLoader(config_path).load()

    source = InMemoryFieldSource(values)
    surface = InMemoryFieldSurface()
    form = FormValidator(source, surface, form_id=Path(config_path).stem)
    form.initialize(config.fields, config.to_options())

    attempt = surface.attempt_submit()

    return {
        "submitted": attempt.allowed,
        "invalid_fields": form.invalid_fields(),
        "fields": {name: result.model_dump() for name, result in form.results.items()},
    }


def format_report(report: dict[str, Any]) -> str:
    """Format a check report for terminal output."""
    lines = []
    for name, result in report["fields"].items():
        status = "ok" if result["is_valid"] else "INVALID"
        lines.append(f"{name}: {status}")
        for message in result["messages"]:
            lines.append(f"  - {message}")
    lines.append("")
    lines.append("Submission allowed" if report["submitted"] else "Submission blocked")
    return "\n".join(lines)


def check_command(args) -> int:
    """
    Execute the check command.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    if args.metrics_port:
        logger.info(f"Serving metrics on port {args.metrics_port}")
        start_metrics_server(args.metrics_port)

    try:
        values = load_values(args.values)
        report = check_form(args.config, values)
    except (FileNotFoundError, FormConfigurationError) as e:
        logger.error(f"Cannot check form: {e}")
        return 2

    if args.output == "json":
        print(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        print(format_report(report))

    return 0 if report["submitted"] else 1


def rules_command(args) -> int:
    """
    Execute the rules command: list rule names and default messages.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    registry = RuleRegistry()
    if args.config:
        try:
            registry.add_rules(FormConfigLoader(args.config).load().rules)
        except (FileNotFoundError, FormConfigurationError) as e:
            logger.error(f"Cannot load rules: {e}")
            return 2

    summary = registry.summary()
    for name, message in summary["messages"].items():
        print(f"{name}: {message}")
    print(f"Total rules: {summary['total_rules']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate form values against a form configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check values and print a readable report
  python -m formcheck.cli.check_cli check --config config/signup.yaml --values signup.json

  # Machine-readable report
  python -m formcheck.cli.check_cli check --config config/signup.yaml --values signup.yaml --output json

  # Expose evaluation metrics to a Prometheus scraper
  python -m formcheck.cli.check_cli check --config config/signup.yaml --values signup.json --metrics-port 8000

  # List available rules
  python -m formcheck.cli.check_cli rules --config config/signup.yaml
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser("check", help="Check field values")
    check_parser.add_argument(
        "--config",
        required=True,
        help="Path to form configuration YAML file"
    )
    check_parser.add_argument(
        "--values",
        required=True,
        help="Path to JSON or YAML file of field values"
    )
    check_parser.add_argument(
        "--output",
        default="text",
        choices=["text", "json"],
        help="Report format (default: text)"
    )
    check_parser.add_argument(
        "--metrics-port",
        type=int,
        help="Expose Prometheus metrics on this port while checking"
    )

    rules_parser = subparsers.add_parser("rules", help="List available rules")
    rules_parser.add_argument(
        "--config",
        help="Form configuration YAML whose named rules are included"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "check":
        return check_command(args)
    return rules_command(args)


if __name__ == "__main__":
    sys.exit(main())
