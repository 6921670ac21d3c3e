"""
knitcalc: gauge, shaping, and hammer-sleeve calculations for knitting patterns.

Entry points for raw form or JSON input live in knitcalc.api; the typed
calculators live in knitcalc.shaping, knitcalc.resizer and
knitcalc.hammer_sleeve.
"""
