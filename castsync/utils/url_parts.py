# Copyright 2025 thestill.me
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

"""Helpers for deriving filename and type information from episode URLs."""

from typing import Optional

INSECURE_PREFIX = "http://"
SECURE_PREFIX = "https://"


def upgrade_scheme(url: str) -> str:
    """Replace a literal leading http:// with https://; other URLs are unchanged."""
    if url.startswith(INSECURE_PREFIX):
        return SECURE_PREFIX + url[len(INSECURE_PREFIX) :]
    return url


def extract_basename(path: Optional[str]) -> Optional[str]:
    """
    Get the last path segment without its extension.

    Everything from the first "." of the segment onward is dropped, so
    "https://cdn/ep/show-12.mp3" gives "show-12" and "a.b.mp3" gives "a".
    """
    if not path:
        return None
    segment = path.split("/")[-1]
    return segment.split(".")[0]


def extract_extension(path: str) -> str:
    """Get the text after the last "."; a path without "." is returned whole."""
    return path.split(".")[-1]
