# Copyright 2025 Google LLC
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
# ==============================================================================
"""Helpers for naming chat channels."""

import re
from typing import Optional

DEFAULT_CHAT_NAME = "New Chat"
TEMPORARY_CHAT_PREFIX = "New Chat "
MAX_CHAT_NAME_WORDS = 4


def fallback_chat_name(first_message: Optional[str]) -> str:
    """Chat name used when no generated title is available."""
    text = (first_message or "").strip()
    if not text:
        return DEFAULT_CHAT_NAME
    words = text[:30].split(" ")[:MAX_CHAT_NAME_WORDS]
    return " ".join(words).strip() or DEFAULT_CHAT_NAME


def clean_chat_name(raw_name: Optional[str]) -> str:
    """Normalizes a model-generated chat title."""
    text = re.sub(r"^[\"']|[\"']$", "", (raw_name or "").strip())
    words = [w for w in text.split(" ") if w][:MAX_CHAT_NAME_WORDS]
    cleaned = " ".join(w[:1].upper() + w[1:].lower() for w in words)
    return cleaned or DEFAULT_CHAT_NAME


def is_temporary_channel_name(name: Optional[str]) -> bool:
    return bool(name) and name.startswith(TEMPORARY_CHAT_PREFIX)


def format_channel_name(name: Optional[str]) -> str:
    if not name:
        return "Unnamed Channel"
    cleaned = re.sub(r"^(dm_|channel_)", "", name, flags=re.IGNORECASE)
    return " ".join(w[:1].upper() + w[1:] for w in cleaned.split("_"))
