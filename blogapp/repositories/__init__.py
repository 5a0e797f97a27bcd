# Repositories package init
"""
BlogApp Client Core — Repositories
===================================

What:  The boundary where raised errors become `Failure` values.
How:   Each repository composes data sources and a ConnectionChecker and
       returns `Either[Failure, T]` from every public method.

Inventory:
    - BlogRepository: upload a blog, fetch all blogs (online/offline)
    - AuthRepository: sign up, sign in, current user
"""
