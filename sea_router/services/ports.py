# sea_router/services/ports.py
import json
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from sea_router.core.errors import PortNotFound
from sea_router.core.logger import logger
from sea_router.models.route import Position
from sea_router.models.routing import Port

_PORT_LIST = TypeAdapter(List[Port])


class PortDirectory:
    """
    Static list of named ports used to resolve human-facing requests.
    """

    def __init__(self, ports: Optional[List[Port]] = None) -> None:
        self.ports: List[Port] = list(ports or [])

    @classmethod
    def from_file(cls, path: str) -> "PortDirectory":
        """
        Load ports from a JSON list of {port, country, latitude, longitude}.

        A missing or malformed file leaves the directory empty; routing by
        raw coordinates keeps working without it.
        """
        source = Path(path)
        try:
            with source.open("r", encoding="utf-8") as fh:
                ports = _PORT_LIST.validate_python(json.load(fh))
        except (OSError, ValueError, ValidationError) as exc:
            logger.error("Error loading port data from {}: {}", source, exc)
            return cls()

        logger.info("Loaded {} ports from {}", len(ports), source)
        return cls(ports)

    def search(self, query: str) -> List[Port]:
        # Case-insensitive substring match on port name or country
        needle = (query or "").lower()
        return [
            p for p in self.ports
            if needle in p.port.lower() or needle in p.country.lower()
        ]

    def lookup(self, name: str) -> Position:
        for p in self.ports:
            if p.port == name:
                return (p.longitude, p.latitude)
        raise PortNotFound(f"Port not found: {name}")
