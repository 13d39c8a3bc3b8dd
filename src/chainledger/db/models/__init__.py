from chainledger.db.models.conversion import ConversionRecord

__all__ = ["ConversionRecord"]
