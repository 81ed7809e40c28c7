"""
Application Layer

Contains use cases, command/query handlers, and application services.
This layer orchestrates domain objects and infrastructure to fulfill use cases.

Structure:
- commands/: write operations (play, skip, leave, playlist create/add/play)
- queries/: read operations (queue, playlists)
- services/: session registry, track completion and the confirmation flow
- interfaces/: port interfaces for infrastructure adapters
"""
