"""Domain layer (form rules and validation).

Domain modules should not depend on UI or on the network. The prediction client
is injected into the controller in the services layer.
"""
