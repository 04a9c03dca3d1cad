from asus_model_api.routes.catalog import router as catalog_router

__all__ = ["catalog_router"]
