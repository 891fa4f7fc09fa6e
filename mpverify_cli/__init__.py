"""
mpverify command line interface.
"""
