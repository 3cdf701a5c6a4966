from fastapi import FastAPI

from customer_api.api.customers import router as customers_router
from customer_api.api.customers import rules_router as customers_rules_router
from customer_api.api.errors import register_error_handlers
from customer_api.api.invoices import router as invoices_router
from customer_api.api.telephone_numbers import router as telephone_numbers_router
from customer_api.config import get_settings
from customer_api.log_config import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(
    title="Customer, Invoice & Telephone Number API",
    version="0.1.0",
)

@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(customers_router)
app.include_router(customers_rules_router)
app.include_router(invoices_router)
app.include_router(telephone_numbers_router)

register_error_handlers(app)
