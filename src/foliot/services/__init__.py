"""Clock state machine, entry store operations, reports and external programs."""
