"""
Bot Module

Message routing for the wallet bot.
Exports: MessageDispatcher, create_dispatcher
"""

from bot.dispatcher import MessageDispatcher, create_dispatcher

__all__ = [
    "MessageDispatcher",
    "create_dispatcher",
]
