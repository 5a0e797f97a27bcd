# Core package init
"""
BlogApp Client Core — Shared Building Blocks
=============================================

Inventory:
    - result:              Failure, Left/Right (Either)
    - usecase:             UseCase contract, NoParams marker
    - bloc:                StateContainer and Bloc base classes
    - connection_checker:  ConnectionChecker contract, httpx-backed probe
    - cache_box:           File-backed key-value box for offline reads
"""
