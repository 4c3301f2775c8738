"""
fkdoctor

Diagnoses MySQL foreign key failures hit during schema migrations and builds
a remediation prompt for a language model.
"""

__version__ = "0.1.0"
