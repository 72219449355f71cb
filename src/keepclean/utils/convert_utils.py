"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Byte-size parsing for --min-size/--max-size and size formatting for the run report.
"""
import re

# 1024-based, same as the MB/GB figures of the summary line
SIZE_UNITS = {
    "": 1, "B": 1,
    "K": 1024, "KB": 1024,
    "M": 1024 ** 2, "MB": 1024 ** 2,
    "G": 1024 ** 3, "GB": 1024 ** 3,
    "T": 1024 ** 4, "TB": 1024 ** 4,
}
DISPLAY_UNITS = ("B", "KB", "MB", "GB", "TB")

_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)\s*([A-Z]*)$")


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """1536 -> '1.50KB'. Negative input reads as '0B'."""
        if size_bytes < 0:
            return "0B"

        value = float(size_bytes)
        index = 0
        while value >= 1024 and index < len(DISPLAY_UNITS) - 1:
            value /= 1024
            index += 1
        return f"{value:.2f}{DISPLAY_UNITS[index]}"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Parse a file size bound such as '500', '1.5K', '10MB' or '2 GB' into bytes.
        Units are case-insensitive. Signs are rejected, so negative bounds never parse.
        """
        match = _SIZE_PATTERN.match(size_str.strip().upper())
        if not match:
            raise ValueError(
                f"Invalid file size '{size_str}': expected a number with an optional "
                f"unit, e.g. 500, 1.5K, 10MB, 2GB"
            )

        number, unit = match.groups()
        if unit not in SIZE_UNITS:
            raise ValueError(f"Unknown size unit '{unit}' in '{size_str}' (use B, K, M, G or T)")
        return int(float(number) * SIZE_UNITS[unit])
