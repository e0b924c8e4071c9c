from swisstour.models.tournament.pairing_history import PairingHistory

__all__ = ["PairingHistory"]
