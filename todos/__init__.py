"""
todos: per-user todo records.

``TodoStore`` persists rows without any authorization; ``TodoService``
enforces that only a todo's owner can change or delete it.
"""
