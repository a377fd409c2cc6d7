"""Centralized user-facing text for linecacher."""

from __future__ import annotations


class Styles:
    ERROR = "red"
    WARNING = "yellow"
    SUCCESS = "green"
    INFO = "dim"


class Messages:
    APP_HELP = "linecacher – inspect source lines through the line cache."
    HELP_FILE = "File name, resolved through the working directory and search path."
    HELP_LINE = "First line to show (1-based)."
    HELP_END = "Last line to show (inclusive)."
    HELP_FORMAT = "Output format: plain, terminal, terminal256 or truecolor."
    HELP_VERBOSE = "Log cache activity to stderr."
    HELP_SHOW_CONFIG = "Show current configuration."
    HELP_ADD_PATH = "Append a directory to the search path."
    HELP_REMOVE_PATH = "Remove a directory from the search path."
    HELP_CLEAR_PATH = "Remove every directory from the search path."
    HELP_SET_THEME = "Set the highlight theme (dark or light)."
    HELP_SET_RELOAD = "Check files for changes before every getline (true/false)."

    ERROR_FILE_NOT_FOUND = "Cannot find or read {name}."
    ERROR_LINE_OUT_OF_RANGE = "{name} has no line {line} (it has {count} lines)."
    ERROR_FORMAT_INVALID = "Unsupported format '{value}'. Allowed: {allowed}."
    ERROR_THEME_INVALID = "Unsupported theme '{value}'. Allowed: {allowed}."
    ERROR_BOOLEAN_INVALID = "Invalid boolean '{value}'. Use true or false."
    ERROR_CONFIG_JSON_INVALID = "Config payload must be a JSON object."
    ERROR_CONFIG_VALUE_INVALID = "Config field '{field}' has an invalid value."

    INFO_LNUMS_UNAVAILABLE = "Trace line numbers are unavailable for {name}."
    INFO_NO_CONFIG_CHANGES = "No configuration changes requested."
    INFO_PATH_ADDED = "Added {path} to the search path."
    INFO_PATH_REMOVED = "Removed {path} from the search path."
    INFO_PATH_NOT_CONFIGURED = "{path} is not on the search path."
    INFO_PATH_CLEARED = "Search path cleared."
    INFO_THEME_SET = "Highlight theme set to {value}."
    INFO_RELOAD_SET = "Reload on change set to {value}."
    INFO_CONFIG_SUMMARY = (
        "Search path: {search_path}\n"
        "Use sys.path: {use_sys_path}\n"
        "Reload on change: {reload}\n"
        "Use script lines: {script_lines}\n"
        "Theme: {theme}"
    )
    INFO_FILE_SUMMARY = (
        "Path: {path}\n"
        "Lines: {lines}\n"
        "Size: {size} bytes\n"
        "Modified: {mtime}\n"
        "SHA1: {sha1}"
    )
