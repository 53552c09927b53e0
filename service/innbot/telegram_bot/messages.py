"""
Fixed reply texts.
"""

GREETING_TEXT = "Hi! I'm a bot that looks up company information by INN."

HELP_TEXT = """/start – start the conversation
/help – list of commands
/hello – information about the developer
/inn <INN...> – find companies
/last – repeat the last action"""

INN_MISSING_TEXT = "Specify an INN after the /inn command. Several can be separated by spaces."

NO_PREVIOUS_COMMAND_TEXT = "No previous command."

UNKNOWN_COMMAND_TEXT = "Unknown command. Type /help."
