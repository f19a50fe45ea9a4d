"""
Entity handles mapping the app's symbolic names to remote tables.

Handles are resolved lazily against the configured admin client so importing
this module never needs credentials.

Users are not a table here: they live in the provider's auth service and are
listed through ``RestClient.list_users``.
"""

from __future__ import annotations

from typing import Optional

from backend.rest import EntityClient, RestClient

ENTITY_TABLES = {
    # Content/SEO automation
    "Keyword": "keywords",
    "ContentQueue": "content_queue",
    "PerformanceMetric": "performance_metrics",
    "WordPressConnection": "wordpress_connections",
    "AutomationSettings": "automation_settings",
    "PageOptimization": "page_optimizations",
    "BlogPost": "blog_posts",
    "SocialPost": "social_posts",
    "KnowledgeBaseDocument": "knowledge_base_documents",
    "AgentFeedback": "agent_feedback",
    "FileDocument": "file_documents",
    "ChatChannel": "chat_channels",
    "ChatMessage": "chat_messages",
    # Agent system
    "AgentDefinition": "agent_definitions",
    "AgentConversation": "agent_conversations",
    "AgentMessage": "agent_messages",
    # Client/project management and time tracking
    "Client": "clients",
    "Project": "projects",
    "Task": "tasks",
    "TimeEntry": "time_entries",
    # EOS
    "EOSCompany": "eos_companies",
    "EOSRock": "eos_rocks",
    "EOSIssue": "eos_issues",
    "EOSScorecard": "eos_scorecards",
    "EOSAccountabilitySeat": "eos_accountability_seats",
    "EOSPersonAssessment": "eos_person_assessments",
    "EOSProcess": "eos_processes",
    "EOSProcessImprovement": "eos_process_improvements",
    "EOSScorecardMetric": "eos_scorecard_metrics",
    "EOSScorecardEntry": "eos_scorecard_entries",
    "EOSQuarterlySession": "eos_quarterly_sessions",
    "EOSToDo": "eos_todos",
    # Notes and reports
    "MeetingNote": "meeting_notes",
    "Report": "reports",
}


def get_entity(name: str, client: Optional[RestClient] = None) -> EntityClient:
    table_name = ENTITY_TABLES[name]
    if client is None:
        # Imported here to keep the module free of settings at import time.
        from backend.dependencies import get_admin_client

        client = get_admin_client()
    return client.table(table_name)


def __getattr__(name: str) -> EntityClient:
    # ``from backend.entities import Keyword`` style access
    if name in ENTITY_TABLES:
        return get_entity(name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
