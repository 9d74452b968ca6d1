# Status Keys
SUCCESS = "success"
WARNING = "warning"
ERROR = "error"

# Actions
INSTALL = "install"
UPDATE = "update"
REMOVE = "remove"
ACTIONS = (INSTALL, UPDATE, REMOVE)

# Ledger markers
REMOVED = "Removed"
FAILED = "Failed"

# Operation Messages
INSTALL_START = "Installing {tool}..."
INSTALL_SUCCESS = "{tool} installed successfully. Version: {version}"
INSTALL_ALREADY = "{tool} is already installed. Version: {version}"
INSTALL_FAIL = "Failed to install {tool}: {error}"

UPDATE_START = "Updating {tool}..."
UPDATE_SUCCESS = "{tool} updated. Version: {version}"
UPDATE_SKIPPED = "{tool} is not installed. Skipping update."
UPDATE_FAIL = "Failed to update {tool}: {error}"

REMOVE_START = "Removing {tool}..."
REMOVE_SUCCESS = "{tool} removed successfully."
REMOVE_SKIPPED = "{tool} is not installed. Nothing to remove."
REMOVE_FAIL = "Failed to remove {tool}: {error}"

# Module Messages
MODULE_START = "{action} {title}..."
MODULE_DONE = "{title} {action} completed!"

# Name resolution
PACKAGE_NOT_FOUND = "Package '{name}' not found."
DID_YOU_MEAN = "Did you mean: {suggestion}"
NO_SUGGESTION = "No suggestions found for '{name}'."
