"""Access control — who may do what on the course board.

- Identity registry: the admin and the bounded moderator set
- Ban registry: creators barred from adding courses
- Policy: pure role and ownership predicates
"""
