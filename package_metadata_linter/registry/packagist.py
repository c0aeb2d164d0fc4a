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

"""Packagist lookups deciding whether a package is private."""

import logging
from typing import Dict, Optional

import requests

from ..exceptions import RegistryLookupError

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://repo.packagist.org"


class RegistryLookupCache:
    """Memoized "is this package missing from packagist.org?" lookups.

    One instance lives for one lint run. Every distinct package causes at
    most one request; metadata for several languages of the same package
    reuses the answer.
    """

    def __init__(
        self,
        registry_url: str = DEFAULT_REGISTRY_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.registry_url = registry_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self._private: Dict[str, bool] = {}

    def package_url(self, package: str) -> str:
        return f"{self.registry_url}/p/{package}.json"

    def is_private(self, package: str) -> bool:
        """Return True when the registry does not know the package.

        Raises:
            RegistryLookupError: On any response other than 200/404, on
                transport failures and on a 200 without a JSON body
        """
        if package in self._private:
            return self._private[package]

        self._private[package] = self._lookup(package)
        return self._private[package]

    def _lookup(self, package: str) -> bool:
        url = self.package_url(package)
        logger.debug(f"Checking if package exists on packagist.org: {package}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RegistryLookupError(f"Could not query {url}: {exc}") from exc

        if response.status_code == 404:
            logger.debug(f"Package {package} not found in registry, treating it as private")
            return True

        if response.status_code != 200:
            try:
                response.raise_for_status()
            except requests.HTTPError as exc:
                raise RegistryLookupError(f"Unexpected response from {url}: {exc}") from exc
            raise RegistryLookupError(
                f"Unexpected response from {url}: status code {response.status_code}"
            )

        try:
            response.json()
        except ValueError as exc:
            raise RegistryLookupError(f"Registry returned malformed JSON for {url}") from exc

        return False
