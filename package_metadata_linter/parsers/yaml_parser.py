# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""YAML parser for metadata files, with source locations for diagnostics."""

import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Union, Tuple

from ..exceptions import MetadataParseError

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]


class YamlParser:
    """YAML parser returning plain data plus a JSON-pointer source map."""

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
        return token.replace("~", "~0").replace("/", "~1")

    @classmethod
    def _build_source_map_from_yaml(cls, content: str) -> SourceMap:
        """Build a mapping from YAML JSON-pointer-like paths to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose) so we can track locations without
        changing the parsed data shapes returned by safe_load.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Parsing errors are reported by parse(); locations are best effort.
            return source_map

        if root is None:
            return source_map

        def _record(path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        def _walk(node, path: str) -> None:
            _record(path, node)

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(value_node, f"{path}/{cls._json_pointer_escape(str(key))}")
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        _walk(root, "")
        return source_map

    def parse(self, content: str) -> Any:
        """Parse YAML string content.

        Args:
            content: YAML string content

        Returns:
            Parsed data; an empty document yields an empty dict

        Raises:
            MetadataParseError: If content is not valid YAML
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise MetadataParseError(f"Failed to parse YAML content: {exc}") from exc

        if data is None:
            data = {}
        return data

    def parse_with_source(self, content: str) -> Tuple[Any, SourceMap]:
        """Parse YAML string content and return (data, source_map).

        source_map keys are JSON-pointer-like YAML paths (e.g. "/de/keywords/0").
        Values contain 1-based line/column.
        """
        data = self.parse(content)
        return data, self._build_source_map_from_yaml(content)

    def read_text(self, file_path: Union[str, Path]) -> str:
        """Read a metadata file verbatim.

        Newlines are not translated, so the line-ending check sees the bytes
        that are committed to the repository.
        """
        path = Path(file_path)
        logger.debug(f"Reading metadata file: {path}")
        with open(path, 'r', encoding='utf-8', newline='') as stream:
            return stream.read()


# Global parser instance
yaml_parser = YamlParser()
