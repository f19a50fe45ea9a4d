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
"""Display labels for content queue statuses and content types."""

STATUS_LABELS = {
    "draft": "Draft",
    "pending_review": "Pending Review",
    "approved": "Approved",
    "scheduled": "Scheduled",
    "published": "Published",
    "rejected": "Rejected",
    "in_progress": "In Progress",
    "completed": "Completed",
    "queued": "Queued",
}

TYPE_LABELS = {
    "new_article": "New Article",
    "update": "Update",
    "optimization": "Optimization",
    "rewrite": "Rewrite",
}


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def type_label(content_type: str) -> str:
    return TYPE_LABELS.get(content_type, content_type)
