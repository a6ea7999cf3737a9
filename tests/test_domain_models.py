from use_cases.domain_models import Category, ImageUpload, Page, Product, ProductFormData


def test_product_from_dict_parses_decimal_strings():
    product = Product.from_dict(
        {"id": "4", "name": "Brocha", "sku": "PIN-004", "price": "12.50", "stock": "7", "min_stock": None,
         "category": {"id": 2, "name": "Pinturas"}, "image": None}
    )

    assert product.price == 12.5
    assert product.stock == 7
    assert product.min_stock == 0
    assert product.category == Category(id=2, name="Pinturas")
    assert product.total_value == 87.5
    assert product.is_low_stock is False


def test_page_from_envelope_and_plain_list():
    envelope = Page.from_dict({"count": 30, "next": "n", "results": [{"id": 1, "name": "A"}]}, Category.from_dict)
    plain = Page.from_dict([{"id": 1, "name": "A"}, {"id": 2, "name": "B"}], Category.from_dict)

    assert envelope.count == 30
    assert envelope.next == "n"
    assert plain.count == 2
    assert plain.next is None


def test_product_form_fields_exclude_image():
    form = ProductFormData(
        name="Brocha", sku="PIN-004", category_id=2, price=12.5, stock=7, min_stock=2,
        image=ImageUpload("b.png", b"x", "image/png"),
    )

    fields = form.fields()

    assert "image" not in fields
    assert fields["category_id"] == 2
    assert fields["is_active"] is True
