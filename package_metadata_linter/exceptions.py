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

"""Custom exceptions for the package metadata linter."""


class MetadataLinterError(Exception):
    """Base exception for metadata linter errors."""
    pass


class LinterConfigurationError(MetadataLinterError):
    """Exception raised when the linter is misconfigured (missing paths, bad schema)."""
    pass


class MetadataParseError(MetadataLinterError):
    """Exception raised when a metadata file cannot be parsed as YAML."""
    pass


class RegistryLookupError(MetadataLinterError):
    """Exception raised when the package registry cannot be queried.

    A 404 is not an error (the package is private); everything else means the
    linter cannot decide which policy applies, so the run must stop.
    """
    pass
