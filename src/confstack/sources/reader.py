from __future__ import annotations

import importlib.resources
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from confstack.errors import SourceParseError, SourceUnavailable
from confstack.sources.interfaces import FORMAT_EXTENSIONS, SourceFormat
from confstack.sources.properties import parse_properties
from confstack.sources.yaml_source import parse_yaml

logger = logging.getLogger(__name__)

_PARSERS: Dict[SourceFormat, Callable[..., Dict[str, str]]] = {
    "properties": parse_properties,
    "yaml": parse_yaml,
}


class FileSourceReader:
    """
    Reads `<name>.properties` / `<name>.yml`.

    A bundled resource of `resource_package` wins over the filesystem; filesystem
    candidates are tried in `search_paths` order.
    """

    def __init__(
        self,
        *,
        search_paths: Sequence[str] = (".",),
        resource_package: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> None:
        self._search_paths = tuple(search_paths) or (".",)
        self._resource_package = resource_package
        self._encoding = encoding

    def read(self, name: str, fmt: SourceFormat) -> Dict[str, str]:
        filename = f"{name}{FORMAT_EXTENSIONS[fmt]}"
        text, origin = self._read_text(filename)
        data = _PARSERS[fmt](text, source=origin)
        logger.debug("sources.read file=%s origin=%s keys=%d", filename, origin, len(data))
        return data

    def _read_text(self, filename: str) -> Tuple[str, str]:
        bundled = self._read_resource(filename)
        if bundled is not None:
            return bundled

        for candidate in self._candidate_paths(filename):
            if not candidate.is_file():
                continue
            try:
                return candidate.read_text(encoding=self._encoding), str(candidate)
            except UnicodeDecodeError as exc:
                raise SourceParseError(str(candidate), f"Not valid {self._encoding} text. error={exc}") from exc
            except OSError as exc:
                raise SourceUnavailable(filename, f"Error opening file: {candidate}") from exc
        raise SourceUnavailable(filename)

    def _read_resource(self, filename: str) -> Optional[Tuple[str, str]]:
        if not self._resource_package:
            return None
        resource_name = Path(filename).name
        try:
            resource = importlib.resources.files(self._resource_package).joinpath(resource_name)
        except ModuleNotFoundError:
            logger.warning("sources.resource_package_missing package=%s", self._resource_package)
            return None
        if not resource.is_file():
            return None
        origin = f"{self._resource_package}:{resource_name}"
        try:
            text = resource.read_text(encoding=self._encoding)
        except UnicodeDecodeError as exc:
            raise SourceParseError(origin, f"Not valid {self._encoding} text. error={exc}") from exc
        except OSError as exc:
            raise SourceUnavailable(filename, f"Error opening resource: {self._resource_package}/{resource_name}") from exc
        return text, origin

    def _candidate_paths(self, filename: str) -> List[Path]:
        path = Path(filename)
        if path.is_absolute() or len(path.parts) > 1:
            return [path]
        return [Path(base) / path for base in self._search_paths]
