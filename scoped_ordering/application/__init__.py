"""
Application layer.

The application layer orchestrates the ordering rules against the ports it
defines. It contains:
- Protocols: the store capabilities the rules consume
- Services: the position engine and the save/destroy lifecycle hooks
- Use cases: the operations available to external actors
"""
