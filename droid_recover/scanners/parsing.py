"""Turn adb listing output into absolute device paths."""

from .filetypes import extension_of


def is_usable_output(output: str) -> bool:
    """False for blank output and for the errors adb or the shell print instead of a listing."""
    if not output or not output.strip():
        return False
    if "No such file" in output:
        return False
    return not output.lstrip().startswith("Error:")


def _has_extension(name: str) -> bool:
    return bool(extension_of(name))


def parse_ls_recursive(output: str, base: str) -> list[str]:
    """Parse `ls -R` output into file paths.

    `/some/dir:` headers and bare lines starting with `/` switch the current
    directory and never produce a path themselves. Any other line is an entry
    of the current directory; it is kept when it looks like a file (it has an
    extension, or no dot at all).
    """
    paths = []
    current = base.rstrip("/") or "/"

    for raw in output.splitlines():
        line = raw.strip()
        if not line:
            continue

        if line.endswith(":") and "/" in line:
            current = line[:-1]
            continue

        if line.startswith("/"):
            current = line
            continue

        if _has_extension(line) or "." not in line:
            sep = "" if current.endswith("/") else "/"
            paths.append(f"{current}{sep}{line}")

    return paths


def parse_path_lines(output: str) -> list[str]:
    """One path per line, as printed by find."""
    return [line.strip() for line in output.splitlines() if line.strip()]


def parse_size(output: str) -> int:
    """Digits-only parse of a stat result; 0 when nothing usable."""
    digits = "".join(c for c in output.strip() if c.isdigit())
    if not digits:
        return 0
    return int(digits)


def parse_ls_long_size(output: str) -> str:
    """Size column of `ls -ld` (mode links owner group size ...)."""
    parts = output.strip().split()
    if len(parts) >= 5:
        return parts[4]
    return ""
