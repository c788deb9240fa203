"""Parser for localization config files (.ini)."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

BOOL_VALUES = {
    "true": True,
    "yes": True,
    "on": True,
    "1": True,
    "false": False,
    "no": False,
    "off": False,
    "0": False,
}


@dataclass
class LocalizationConfig:
    """Parsed key/value and key/array pairs of a config file, by section."""

    sections: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)
    source: Optional[Path] = None

    def get_array(self, section: str, key: str) -> Optional[List[str]]:
        """Get every value of a key, or None if the key is absent."""
        values = self.sections.get(section, {}).get(key)
        if values is None:
            return None
        return list(values)

    def get_string(self, section: str, key: str) -> Optional[str]:
        """Get the last value assigned to a key, or None if the key is absent."""
        values = self.sections.get(section, {}).get(key)
        if not values:
            return None
        return values[-1]

    def get_bool(self, section: str, key: str) -> Optional[bool]:
        """Get a boolean key, or None if the key is absent or not a boolean."""
        value = self.get_string(section, key)
        if value is None:
            return None
        return BOOL_VALUES.get(value.strip().lower())


class LocalizationConfigParser:
    """Parser for .ini localization config files."""

    COMMENT_PREFIXES = (";", "#")

    def parse(self, file_path) -> LocalizationConfig:
        """
        Parse a config file.

        Args:
            file_path: Path to the .ini file

        Returns:
            LocalizationConfig with all parsed sections
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        with open(path, "r", encoding="utf-8-sig") as f:
            parsed = self.parse_string(f.read())

        parsed.source = path
        return parsed

    def parse_string(self, content: str) -> LocalizationConfig:
        """
        Parse config content from a string.

        Args:
            content: Text of the config file

        Returns:
            LocalizationConfig object
        """
        parsed = LocalizationConfig()
        section: Optional[Dict[str, List[str]]] = None

        for raw_line in content.splitlines():
            line = raw_line.strip()
            if not line or line.startswith(self.COMMENT_PREFIXES):
                continue

            if line.startswith("[") and line.endswith("]"):
                section = parsed.sections.setdefault(line[1:-1].strip(), {})
                continue

            # Keys outside of any section are ignored
            if section is None:
                continue

            self._parse_entry(section, line)

        return parsed

    def _parse_entry(self, section: Dict[str, List[str]], line: str) -> None:
        """Apply a single "key=value" line to a section."""
        if line.startswith("!"):
            # "!Key" clears an array
            key = line[1:].split("=", 1)[0].strip()
            section[key] = []
            return

        if "=" not in line:
            return

        key, value = line.split("=", 1)
        key = key.strip()
        value = self._unquote(value.strip())

        if key.startswith(("+", ".")):
            section.setdefault(key[1:].strip(), []).append(value)
        elif key.startswith("-"):
            values = section.get(key[1:].strip(), [])
            if value in values:
                values.remove(value)
        else:
            section[key] = [value]

    def _unquote(self, value: str) -> str:
        if len(value) >= 2 and value[0] == value[-1] == '"':
            return value[1:-1]
        return value
