"""
Services Module

Domain logic shared by the routers:
- avatar: Gravatar URL derivation from an email address
- profiles: profile upsert, experience/education entries, account deletion
"""
