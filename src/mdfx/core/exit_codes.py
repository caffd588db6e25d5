# topmark:header:start
#
#   project      : mdfx
#   file         : exit_codes.py
#   file_relpath : src/mdfx/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Exit codes for the mdfx CLI.

mdfx aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the mdfx CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (e.g. `verify` found inconsistent assets).
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        TEMPLATE_ERROR: Malformed template (parse, resolution, expansion or render
            error). Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        UNSUPPORTED_TARGET: The target cannot host the requested backend.
            Mirrors BSD ``EX_UNAVAILABLE (69)``.
        IO_ERROR: I/O error reading/writing a file or asset. Mirrors BSD ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions. Mirrors BSD ``EX_NOPERM (77)``.
        CONFIG_ERROR: Missing/invalid/malformed configuration. Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 64
    TEMPLATE_ERROR = 65
    FILE_NOT_FOUND = 66
    UNSUPPORTED_TARGET = 69
    IO_ERROR = 74
    PERMISSION_DENIED = 77
    CONFIG_ERROR = 78
    UNEXPECTED_ERROR = 255
