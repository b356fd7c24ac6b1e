"""
Spreadsheet tooling
Helpers that prepare the command table outside the running bot
"""
