"""YAML serializer adapter backed by PyYAML."""

from __future__ import annotations

from typing import Any

import yaml

from cardpack.app.ports import SerializerPort
from cardpack.errors import InvalidFormatError


class YamlSerializer(SerializerPort):
    """Parse with ``yaml.safe_load`` and emit block-style, key-order-preserving YAML."""

    def parse(self, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise InvalidFormatError(f"Invalid YAML: {exc}") from exc

    def stringify(self, value: Any) -> str:
        return yaml.safe_dump(
            value,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
