"""Campus API package.

Hosts the notification targeting and fan-out subsystem of the institutional
record-keeping API.
"""
