"""Hook services (the transforms virt-launcher calls into)."""
