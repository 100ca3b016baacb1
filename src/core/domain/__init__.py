"""Domain types of the hook.

Why:
- The VMI models, the libvirt schema subset and its VNC extension live here.
- The domain knows nothing about the CLI, only about the two documents.
"""
