from blogapp.core.usecase import NoParams
from blogapp.usecases.auth import (
    CurrentUser,
    UserSignIn,
    UserSignInParams,
    UserSignUp,
    UserSignUpParams,
)
from blogapp.usecases.blog import GetAllBlogs, UploadBlog, UploadBlogParams

__all__ = [
    "NoParams",
    "UploadBlog",
    "UploadBlogParams",
    "GetAllBlogs",
    "UserSignUp",
    "UserSignUpParams",
    "UserSignIn",
    "UserSignInParams",
    "CurrentUser",
]
