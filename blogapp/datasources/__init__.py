# Data sources package init
"""
BlogApp Client Core — Data Sources
===================================

What:  The only layer that talks to Supabase or the local cache box.
How:   Abstract contract + one implementation per source. Implementations
       raise `ServerError` (remote) or `CacheError` (local) and nothing else.

Inventory:
    - BlogRemoteDataSource: blog rows, image objects, author join
    - BlogLocalDataSource:  offline snapshot of the blog list
    - AuthRemoteDataSource: sign-up, sign-in, session, profile
"""
