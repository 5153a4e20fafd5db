"""Shared constants for adcloak."""

from __future__ import annotations

from typing import ClassVar


class Application:
    """Application metadata."""

    NAME = "adcloak"
    VERSION = "1.0.0"


class AssetFormats:
    """Static asset file extensions."""

    STYLE_EXTENSIONS: ClassVar[list[str]] = [".css"]
    SCRIPT_EXTENSIONS: ClassVar[list[str]] = [".js"]
    IMAGE_EXTENSIONS: ClassVar[list[str]] = [".png", ".gif", ".jpg", ".jpeg", ".svg"]

    TRACKED_EXTENSIONS: ClassVar[list[str]] = STYLE_EXTENSIONS + SCRIPT_EXTENSIONS + IMAGE_EXTENSIONS

    # Images keep their names: stylesheets reference them through url().
    RENAMED_EXTENSIONS: ClassVar[list[str]] = STYLE_EXTENSIONS + SCRIPT_EXTENSIONS


class ExclusionPatterns:
    """Directory patterns never descended into while scanning."""

    DIRECTORY_PATTERNS: ClassVar[list[str]] = ["vendor", "lib", "admin", "node_modules"]


class Relocation:
    """Relocation defaults."""

    # Segments referenced by fixed path elsewhere (e.g. inside url()).
    # Add a folder here if a bundled library loads something like url(/img/x.png).
    DO_NOT_RENAME: ClassVar[list[str]] = [
        "public",
        "assets",
        "js",
        "css",
        "fancybox",
        "advanced.js",
        "jquery.fancybox-1.3.4.css",
    ]
    ROOT_PATTERNS: ClassVar[list[str]] = ["advanced-ads*"]
    FILE_MODE = 0o644
    LOCK_TIMEOUT = 30.0


class NameAllocation:
    """Random name allocation bounds."""

    RANDOM_MIN = 1
    RANDOM_MAX = 999
    MAX_SHORT_ATTEMPTS = 100


class FileSystem:
    """File system related constants."""

    HOME_DIR = ".adcloak"
    STATE_FILE = "state.json"
    LOCK_SUFFIX = ".lock"
    CONFIG_FILE = "config/adcloak.toml"
    SEPARATOR = "/"


class Encoding:
    """Text encodings."""

    DEFAULT = "utf-8"


class Logging:
    """Logging defaults."""

    DEFAULT_FILE_PATH = "logs/adcloak.log"
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5


class Messages:
    """User-facing messages returned by the admin trigger surface."""

    REBUILD_SUCCESS = "The asset folder was rebuilt successfully"
    CONNECTION_FAILED = "Unable to connect to the filesystem. Please confirm your credentials."
    NO_WRITABLE_DIRECTORY = "There is no writable upload folder"
    RENAME_FAILED = 'Unable to rename "{folder}" directory'
    COPY_FAILED = 'Unable to copy assets to the "{folder}" directory'
    REBUILD_REQUIRED = "Please, rebuild the asset folder. All assets will be located in {folder}"
    LOCK_BUSY = "Another rebuild of the asset folder is in progress"
    UP_TO_DATE = "The asset folder is up to date"


class CLIDefaults:
    """CLI exit codes."""

    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INTERRUPTED = 130


class CLICommands:
    """Command names."""

    REBUILD = "rebuild"
    UPDATE = "update"
    STATUS = "status"
    SCAN = "scan"
    CLEAR = "clear"


class CLIHelp:
    """Help texts."""

    APP_NAME = "adcloak"
    APP_DESCRIPTION = "Relocate extension assets to randomized paths that ad blockers cannot match."
    APP_STYLE = "rich"
    VERSION_TEXT = "adcloak v{version}"
    CONFIG_HELP = "Path to the TOML configuration file."
    REBUILD_HELP = "Rebuild the relocated asset folder."
    RENAME_ALL_HELP = "Assign a new random folder name and re-randomize every path."
    UPDATE_HELP = "Copy new or changed assets if the folder is in use."
    STATUS_HELP = "Show the relocated asset folder and whether it needs a rebuild."
    SCAN_HELP = "List tracked assets and whether they are stale."
    SCAN_STALE_ONLY_HELP = "Only list stale assets."
    CLEAR_HELP = "Remove the relocated asset folder (uninstall)."
    JSON_HELP = "Output results in JSON format."
