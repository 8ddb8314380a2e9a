"""Runner that loads a YAML config and a set of balance files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import yaml

from .exceptions import ConfigError
from .models import CheckerConfig
from .report import CheckReport
from .session import BalanceChecker

logger = logging.getLogger(__name__)


def load_config(config_path: str | Path) -> CheckerConfig:
    """
    Load checker configuration from a YAML or JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the file cannot be parsed or holds invalid values
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        content = f.read()

    # JSON is valid YAML, so this handles both
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file: {e}", {"path": str(config_path)})

    return CheckerConfig.from_dict(data)


class BalanceCheckRunner:
    """
    Loads balance files into a checker session and builds the report.

    Usage:
        runner = BalanceCheckRunner(["a.json", "b.json"], "balance.yaml")
        report = runner.run()

    Or as a one-liner:
        report = BalanceCheckRunner.run_check(["a.json", "b.json"])
    """

    def __init__(
        self,
        files: Iterable[str | Path],
        config_path: Optional[str | Path] = None,
        config: Optional[CheckerConfig] = None
    ):
        """
        Args:
            files: Balance files to compare, in load order
            config_path: Optional YAML/JSON config file
            config: Ready-made configuration; takes precedence over config_path
        """
        self.files = [Path(f) for f in files]
        self.config_path = Path(config_path) if config_path else None
        self._config = config

    @property
    def config(self) -> CheckerConfig:
        """Load and cache the configuration."""
        if self._config is None:
            if self.config_path is not None:
                self._config = load_config(self.config_path)
            else:
                self._config = CheckerConfig()
        return self._config

    def run(self, print_report: bool = True) -> CheckReport:
        """
        Load every file and compare all non-ignored fields.

        Files that fail to parse are reported and skipped.
        """
        checker = BalanceChecker(self.config)
        result = checker.load_files(self.files, extensions=None)

        if print_report:
            for error in result.errors:
                print(f"Error: {error.message}")

        logger.info(
            "Comparing %d documents (%d failed to load)",
            len(result.documents), len(result.errors)
        )
        report = checker.report()

        if print_report:
            report.print_summary(show_consistent=self.config.show_consistent)

        return report

    @classmethod
    def run_check(
        cls,
        files: Iterable[str | Path],
        config_path: Optional[str | Path] = None,
        print_report: bool = True
    ) -> CheckReport:
        runner = cls(files, config_path)
        return runner.run(print_report=print_report)


def run_check(
    files: Iterable[str | Path],
    config_path: Optional[str | Path] = None,
    print_report: bool = True
) -> CheckReport:
    """
    Compare balance files in one call:

        from balancecheck.runner import run_check
        report = run_check(["a.json", "b.json"], "balance.yaml")
    """
    return BalanceCheckRunner.run_check(files, config_path, print_report)
