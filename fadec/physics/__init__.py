"""Physical units and atmosphere models.

Modules:
    units: Imperial/SI conversion factors used by the control law
    atmosphere: International Standard Atmosphere for host-side sensor values
"""
