"""
learnquest/rate_limit.py
Rate limiter shared by the app and the routers that decorate endpoints.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
