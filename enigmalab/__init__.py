"""enigmalab: a simulator of the three-rotor Enigma cipher machine.

Historical / education use only. Do NOT use to protect real data.
"""

__version__ = "0.1.0"
