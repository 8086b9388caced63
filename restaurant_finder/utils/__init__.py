from .logger import ConversationLogger
