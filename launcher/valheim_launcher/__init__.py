"""
valheim_launcher package
------------------------
Lifecycle launcher for Valheim dedicated servers on Linux / Docker hosts.
Contains modules for settings, SteamCMD installation, BepInEx environment
composition, process launching, backups, webhook notifications and a small
control API.
"""

__version__ = "0.4.0"
