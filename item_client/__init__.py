"""
Item Client.

- core/: Configuration, logging, exceptions
- rpc/: Item service stub (httpx), wire schemas, outbound layers
- client/: Shared client handle, call wrappers and error policies
- cli/: Startup checks and the interactive shell (Rich)
"""
