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

"""
Custom exception classes for castsync.

The sync pipeline distinguishes failures that end a feed run from failures
that only affect one episode:

- FeedFetchError / FeedParseError: the feed cannot be read; the feed run ends.
- ReferenceDataError: author/series lookups could not be loaded; the feed run ends.
- ItemWriteError: an insert or link statement failed; the episode is skipped
  and the batch continues.
- EmptyInsertResultError: the store accepted an insert but returned no id.
- StoreError: a read against the record store failed.

Example:
    try:
        service.sync_feed(url)
    except CastsyncError as e:
        logger.error("Feed sync failed", error=e.message, **e.context)
"""


class CastsyncError(Exception):
    """
    Base exception for all castsync application errors.

    Attributes:
        message: Human-readable error message
        context: Optional dict of additional error context (url, filename, etc.)

    Example:
        raise CastsyncError("Failed to read feed", url="https://example.com/feed.xml")
    """

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context if context else {}

    def __str__(self):
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self):
        name = type(self).__name__
        if self.context:
            return f"{name}(message={self.message!r}, context={self.context!r})"
        return f"{name}(message={self.message!r})"


class StoreError(CastsyncError):
    """Raised when a read against the record store fails."""

    pass


class ConfigurationError(CastsyncError):
    """Raised when required configuration is missing or malformed."""

    pass


class FeedFetchError(CastsyncError):
    """Raised when the raw feed document cannot be downloaded."""

    pass


class FeedParseError(CastsyncError):
    """Raised when a downloaded document is not a usable RSS feed."""

    pass


class ReferenceDataError(CastsyncError):
    """Raised when the author or series lookup tables cannot be loaded."""

    pass


class ItemWriteError(CastsyncError):
    """Raised when inserting an item or its series link fails."""

    pass


class EmptyInsertResultError(ItemWriteError):
    """Raised when an item insert returns no generated id."""

    pass


__all__ = [
    "CastsyncError",
    "ConfigurationError",
    "StoreError",
    "FeedFetchError",
    "FeedParseError",
    "ReferenceDataError",
    "ItemWriteError",
    "EmptyInsertResultError",
]
