"""Infrastructure layer for netclient.

The infrastructure layer contains implementations of domain interfaces:
- Transport implementations (asyncio TCP)
- Timer implementations (asyncio event loop)
- The connection state machine and connection manager
- Notification plumbing and error handling decorators

This layer depends on the domain layer (interfaces and value objects), but
the domain layer does NOT depend on infrastructure.
"""
