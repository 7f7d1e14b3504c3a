"""Domain layer for the netclient connection core.

This layer contains:
- Interfaces: Contracts for timers and byte-stream transports
- Value Objects: Immutable primitives (endpoint, retry policy, states, codes)
- Domain Services: Pure logic such as transport error classification
- Exceptions: The client error taxonomy

The domain layer has ZERO dependencies on external libraries (except Python stdlib).
All I/O is abstracted behind interfaces.
"""
