from use_cases.form_validation import validate_category, validate_login, validate_product


def test_validate_login():
    assert validate_login("ana", "secreta") == {}
    assert validate_login("  ", "") == {
        "username": "El usuario es requerido",
        "password": "La contraseña es requerida",
    }


def test_validate_category():
    assert validate_category("Pinturas") == {}
    assert validate_category("   ") == {"name": "El nombre es requerido"}


def test_validate_product_valid():
    assert validate_product("Martillo", "HER-001", 2, 25000.0, 0, 0) == {}


def test_validate_product_missing_fields():
    errors = validate_product("", "", None, None, None, None)

    assert set(errors) == {"name", "sku", "category_id", "price", "stock", "min_stock"}
    assert errors["category_id"] == "La categoría es requerida"


def test_validate_product_negative_values():
    errors = validate_product("Martillo", "HER-001", 2, -1.0, -3, -1)

    assert errors == {
        "price": "El precio debe ser mayor a 0",
        "stock": "El stock no puede ser negativo",
        "min_stock": "El stock mínimo no puede ser negativo",
    }
