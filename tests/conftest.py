import os

# las pruebas nunca deben apuntar a MySQL; se fija antes de importar employee_api
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_CREATE_TABLES", "false")
