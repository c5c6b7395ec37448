"""
Task Tracker client package.

`TaskClient` keeps a local mirror of the server's tasks, applies changes
optimistically and reconciles or rolls back once the server answers.
"""
