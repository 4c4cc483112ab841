from .hikari import HikariMemberResolver, HikariMessage, subscribe

__all__ = ["HikariMessage", "HikariMemberResolver", "subscribe"]
