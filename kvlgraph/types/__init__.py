"""Core types and data structures for kvlgraph.

`base` holds identifier aliases and enums, `dto` holds the immutable edge
records passed between the graph builder, the spanning forest and the path
search.
"""
