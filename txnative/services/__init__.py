from txnative.services.cds import CDSClient

__all__ = ["CDSClient"]
