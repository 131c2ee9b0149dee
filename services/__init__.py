"""
Services for the edep flattener.
"""
