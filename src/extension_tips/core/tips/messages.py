"""User-facing strings for tip notifications."""

SHOW_RECOMMENDATIONS_ACTION_ID = "showRecommendations"
SHOW_WORKSPACE_RECOMMENDATIONS_ACTION_ID = "showWorkspaceRecommendations"
NEVER_SHOW_AGAIN_ACTION_ID = "neverShowAgain"
CLOSE_ACTION_ID = "close"

SHOW_RECOMMENDATIONS_LABEL = "Show Recommendations"
NEVER_SHOW_AGAIN_LABEL = "Don't show again"
CLOSE_LABEL = "Close"

WORKSPACE_RECOMMENDED_MESSAGE = "This workspace has extension recommendations."


def important_recommendation_message(extension_id: str) -> str:
    """Message shown when an important tip matches an opened document."""
    return f"It is recommended to install the '{extension_id}' extension."
