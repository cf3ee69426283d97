def register_namespaces(api):
    """Attach every API namespace to the Flask-RESTX ``Api`` under /api."""
    from api.auth import api as auth_ns
    from api.clients import api as clients_ns
    from api.invoices import api as invoices_ns
    from api.expenses import api as expenses_ns
    from api.products import api as products_ns
    from api.dashboard import api as dashboard_ns

    api.add_namespace(auth_ns, path='/api/auth')
    api.add_namespace(clients_ns, path='/api/clients')
    api.add_namespace(invoices_ns, path='/api/invoices')
    api.add_namespace(expenses_ns, path='/api/expenses')
    api.add_namespace(products_ns, path='/api/products')
    api.add_namespace(dashboard_ns, path='/api/dashboard')
