from chainledger.db.repos.conversion_repo import ConversionRepo, generate_import_id

__all__ = ["ConversionRepo", "generate_import_id"]
