"""
Provisioning core for devops-setup: platform detection, the tool catalog,
name resolution, installer backends, version probing and action dispatch.
"""

__version__ = "1.0.0"
