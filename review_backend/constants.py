from __future__ import annotations

# Discord ID of the automated validator bot; its comments surface as `bot_action`.
VALIDATOR_ID = 810112564787675166

# plain remark; every other action name is a verdict
ACTION_COMMENT = "comment"

AVATAR_BASE_URL = "https://cdn.discordapp.com/avatars"
