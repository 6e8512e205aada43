"""
Word progression state machine module.

Tracks a child's progress through the target sentence one word at a time.
Handles transitions IDLE → ACTIVE(index) → ACTIVE(index + 1) … → COMPLETE.
"""
