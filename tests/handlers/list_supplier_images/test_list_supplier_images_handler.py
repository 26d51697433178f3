import json

from handlers.list_supplier_images.handler import handler


def images_event(supplier_id: str) -> dict:
    return {
        "httpMethod": "GET",
        "path": f"/suppliers/{supplier_id}/images",
        "pathParameters": {"id": supplier_id},
    }


class TestListSupplierImagesHandler:
    def test_lists_owner_images(self, s3_put_object, lambda_context) -> None:
        s3_put_object("suppliers/7-1000.jpg", b"a")
        s3_put_object("suppliers/7-2000.png", b"bb", "image/png")
        s3_put_object("suppliers/8-1000.jpg", b"c")

        response = handler(images_event("7"), lambda_context)
        body = json.loads(response["body"])

        assert response["statusCode"] == 200
        assert body["supplier_id"] == 7
        assert body["count"] == 2
        assert [image["key"] for image in body["images"]] == [
            "suppliers/7-1000.jpg",
            "suppliers/7-2000.png",
        ]
        assert body["images"][0]["url"] == (
            "https://test-supplier-photos.s3.us-east-1.amazonaws.com/suppliers/7-1000.jpg"
        )

    def test_invalid_id(self, lambda_context) -> None:
        assert handler(images_event("x"), lambda_context)["statusCode"] == 422
