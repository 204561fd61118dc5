"""Core — pure domain logic for identity, discriminators, credentials and patches.

Invariants:
    - No module in core/ performs IO directly
    - Store access goes through the Protocols in repository_protocols.py

Design Decisions:
    - Async lookups are injected as callables/protocols so the resolver loop
      stays testable with in-memory fakes
"""
