"""
Task forms.

Components:
- fields.py: host-agnostic form field descriptions
- base.py: shared load/submit plumbing (busy flag, failure toasts)
- create_task.py: "add task" controller
- edit_task.py: "edit task" controller
- dates.py: due-date defaults
"""
