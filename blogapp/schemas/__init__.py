from blogapp.schemas.blog import Blog
from blogapp.schemas.user import User

__all__ = ["Blog", "User"]
