"""
optimist CLI

Commands:
- optimist replay - Run a JSONL action script through the reconciler
- optimist log trace - Show the transaction log after every dispatch
- optimist version
"""

__version__ = "0.1.0"
