# Copyright 2025 Roger Cibrian
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

"""Public API return types for unitychangeset.

Every registry query returns a RequestResult envelope. Callers check
``result.ok`` (or ``result.status``) before trusting ``result.value``;
network failures and upstream markup changes are reported here rather
than raised.

Example:
    Using the envelope:
        ```python
        from unitychangeset.registry import VersionRegistry
        from unitychangeset.results import ResultStatus

        result = VersionRegistry().get_changeset("2022.3.10")
        if result.status is ResultStatus.OK:
            print(result.value)
        else:
            print(f"Error: {result.status.name}")
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ResultStatus(Enum):
    """Outcome of a registry query.

    Attributes:
        OK: The value is valid.
        NOT_FOUND: Unknown version, or the upstream resource returned 404/401.
        HTTP_ERROR: Transport failure (timeout, connection error, cancellation).
        REGEX_NO_VALUE: Upstream markup no longer matches the extraction patterns.
        UNKNOWN_ERROR: Any other failure while fetching.
    """

    OK = "ok"
    NOT_FOUND = "not_found"
    HTTP_ERROR = "http_error"
    REGEX_NO_VALUE = "regex_no_value"
    UNKNOWN_ERROR = "unknown_error"


@dataclass(frozen=True)
class RequestResult(Generic[T]):
    """Status envelope returned by every query.

    Attributes:
        status: Outcome of the operation.
        value: Result payload. Only meaningful when status is OK; failed
            results carry an empty value ("", [] or None).
    """

    status: ResultStatus
    value: T

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.OK
