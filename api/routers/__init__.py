from . import users, sessions

__all__ = [
    'users',
    'sessions'
]
