"""Secern line routing — assigns each line to at most one configured sink.

Sinks pair a compiled pattern set with an output writer: a local file, a
discard writer, or (for unclaimed lines) the passthrough stream.  The
Router evaluates sinks in declared order and the first match claims the
line.  No line is delivered to more than one destination.
"""
