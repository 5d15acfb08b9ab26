"""
Test suite for the optimist reconciler.

Focus areas:
- Transition routing (base, begin, commit, revert)
- Log pruning on commit and revert
- Replay correctness against a plain reducer fold
- Adapter, store and CLI surfaces
"""
