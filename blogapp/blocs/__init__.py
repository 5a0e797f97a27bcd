# Blocs package init
"""
BlogApp Client Core — Business-Logic Layer
===========================================

What:  Event-in / state-out containers consumed by the presentation layer.

Inventory:
    - BlogBloc:      upload and list blogs
    - AuthBloc:      sign up, sign in, restore session
    - AppUserCubit:  the signed-in user, shared app-wide
"""
