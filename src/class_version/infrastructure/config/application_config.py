"""Run configuration for the class-version extractor."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

STDOUT_TARGET = "-"
FRONTENDS = ("clang", "dwarf")


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Config:
    """Configuration for one extraction run."""

    sources: list[Path] = field(default_factory=list)
    output: str = STDOUT_TARGET
    match_patterns: list[str] = field(default_factory=list)
    frontend: str = "clang"
    build_path: Optional[Path] = None
    extra_args: list[str] = field(default_factory=list)
    verbose: bool = False
    log_dir: Optional[Path] = None

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment variables or a .env file.

        Recognized variables: CLASS_VERSION_OUTPUT, CLASS_VERSION_MATCH
        (comma-separated), CLASS_VERSION_FRONTEND, CLASS_VERSION_BUILD_PATH,
        CLASS_VERSION_LOG_DIR and VERBOSE.

        Args:
            env_path: Optional path to .env file (defaults to .env in current directory)

        Returns:
            Config object
        """
        if env_path is None:
            env_path = Path.cwd() / ".env"

        if env_path.exists():
            load_dotenv(env_path)

        build_path_str = os.getenv("CLASS_VERSION_BUILD_PATH")
        log_dir_str = os.getenv("CLASS_VERSION_LOG_DIR")

        return cls(
            output=os.getenv("CLASS_VERSION_OUTPUT", STDOUT_TARGET),
            match_patterns=_split_list(os.getenv("CLASS_VERSION_MATCH", "")),
            frontend=os.getenv("CLASS_VERSION_FRONTEND", "clang"),
            build_path=Path(build_path_str) if build_path_str else None,
            verbose=os.getenv("VERBOSE", "false").lower() in ("true", "1", "yes"),
            log_dir=Path(log_dir_str) if log_dir_str else None,
        )

    @classmethod
    def from_args(
        cls,
        sources: Optional[list[Path]] = None,
        output: Optional[str] = None,
        match_patterns: Optional[list[str]] = None,
        frontend: Optional[str] = None,
        build_path: Optional[Path] = None,
        extra_args: Optional[list[str]] = None,
        verbose: Optional[bool] = None,
        log_dir: Optional[Path] = None,
    ) -> "Config":
        """
        Create configuration from explicit arguments, falling back to environment.

        Args:
            sources: Source files (or ELF files for the dwarf front end)
            output: Output target, "-" for stdout
            match_patterns: Qualified-name substrings to keep
            frontend: Front end name
            build_path: Directory holding compile_commands.json
            extra_args: Extra compiler arguments
            verbose: Enable verbose output
            log_dir: Directory for the debug log file

        Returns:
            Config object
        """
        config = cls.from_env()

        if sources is not None:
            config.sources = list(sources)
        if output is not None:
            config.output = output
        if match_patterns:
            config.match_patterns = list(match_patterns)
        if frontend is not None:
            config.frontend = frontend
        if build_path is not None:
            config.build_path = build_path
        if extra_args is not None:
            config.extra_args = list(extra_args)
        if verbose:
            config.verbose = verbose
        if log_dir is not None:
            config.log_dir = log_dir

        return config

    @property
    def writes_to_stdout(self) -> bool:
        """True when the document goes to standard output."""
        return self.output == STDOUT_TARGET

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.frontend not in FRONTENDS:
            raise ValueError(
                f"Unknown front end: {self.frontend} (expected one of {', '.join(FRONTENDS)})"
            )

        if not self.sources:
            raise ValueError("No input sources given")

        for source in self.sources:
            if not source.exists():
                raise ValueError(f"Source not found: {source}")
            if not source.is_file():
                raise ValueError(f"Not a file: {source}")

        if self.build_path is not None and not self.build_path.is_dir():
            raise ValueError(f"Build path is not a directory: {self.build_path}")
