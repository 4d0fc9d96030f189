"""Configuration for kirjanpito reports.

Settings come from an optional TOML file and are overridden by command line
flags. The result is a ReportConfig passed explicitly to the report pipeline.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import tomli_w

from kirjanpito.domain.formatting import MoneyFormat
from kirjanpito.domain.render import DEFAULT_MONEY_FORMATS, VARIANTS, Variant

OutputFormat = Literal["html", "dump", "summary"]
OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("html", "dump", "summary")

DEFAULT_OUTPUT_NAME = "index.html"


@dataclass(frozen=True)
class ReportConfig:
    """Everything one report run needs to know."""

    path: Path
    output: Path | None = None
    output_format: OutputFormat = "html"
    variant: Variant = "vat"
    title: str | None = None
    strict: bool = False
    money_format: MoneyFormat | None = None

    @property
    def output_path(self) -> Path:
        """Target file for HTML output, defaulting to index.html in the scanned directory."""
        if self.output is not None:
            return self.output
        return self.path / DEFAULT_OUTPUT_NAME

    @property
    def resolved_money_format(self) -> MoneyFormat:
        if self.money_format is not None:
            return self.money_format
        return DEFAULT_MONEY_FORMATS[self.variant]


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "kirjanpito" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "report": {
            "format": "html",
            "variant": "vat",
            "strict": False,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config, f)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary, empty if the default file does not exist.

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()
        if not config_path.exists():
            return {}

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def get_table(settings: dict[str, Any], name: str) -> dict[str, Any]:
    """Get a top level table from the settings, empty when absent.

    Raises:
        ValueError: If the key holds something other than a table.
    """
    table = settings.get(name, {})
    if not isinstance(table, dict):
        raise ValueError(f"[{name}] must be a table, got {type(table).__name__}")
    return table


def get_string(table: dict[str, Any], table_name: str, key: str, default: str | None) -> str | None:
    """Get a string value from a settings table.

    Raises:
        ValueError: If the value is present but not a string.
    """
    value = table.get(key, default)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{table_name}.{key} must be a string, got {type(value).__name__}")
    return value


def parse_money_format(settings: dict[str, Any]) -> MoneyFormat | None:
    """Build a MoneyFormat from the [money] table, or None when absent.

    Raises:
        ValueError: If the table or its values have the wrong type.
    """
    money = get_table(settings, "money")
    if not money:
        return None
    default = MoneyFormat()
    separator = get_string(money, "money", "decimal_separator", default.decimal_separator)
    suffix = get_string(money, "money", "suffix", default.suffix)
    return MoneyFormat(decimal_separator=separator or "", suffix=suffix or "")


def build_report_config(
    path: Path,
    settings: dict[str, Any],
    output: Path | None = None,
    output_format: str | None = None,
    variant: str | None = None,
    title: str | None = None,
    strict: bool = False,
) -> ReportConfig:
    """Merge file settings and command line flags into a ReportConfig.

    Flags that are None fall back to the [report] table of the settings,
    then to built-in defaults. Strict mode is on if either side enables it.

    Raises:
        ValueError: If the format or variant is not recognised, or a
            setting has the wrong type.
    """
    report = get_table(settings, "report")

    output_format = output_format or get_string(report, "report", "format", "html")
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format '{output_format}' (expected one of: {', '.join(OUTPUT_FORMATS)})")

    variant = variant or get_string(report, "report", "variant", "vat")
    if variant not in VARIANTS:
        raise ValueError(f"Unknown report variant '{variant}' (expected one of: {', '.join(VARIANTS)})")

    report_strict = report.get("strict", False)
    if not isinstance(report_strict, bool):
        raise ValueError(f"report.strict must be a boolean, got {type(report_strict).__name__}")
    strict = strict or report_strict

    return ReportConfig(
        path=path,
        output=output,
        output_format=output_format,  # type: ignore[arg-type]
        variant=variant,  # type: ignore[arg-type]
        title=title or get_string(report, "report", "title", None),
        strict=strict,
        money_format=parse_money_format(settings),
    )
