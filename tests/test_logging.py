import logging

import pytest

from modules.orders.exceptions import OrderAlreadyShipped


class TestSensitiveDataMasking:
    def test_password_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert result["header"] == "token=***MASKED***"

    def test_database_url_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "cfg": "DATABASE_URL=mysql://u:p@db/orders"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "u:p@db" not in result["cfg"]

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "order_line.created", "order_id": 99998}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["order_id"] == 99998
        assert result["event"] == "order_line.created"


class TestServiceLogging:
    def test_line_creation_is_logged(self, caplog, line_service, open_order, product):
        with caplog.at_level(logging.INFO, logger="modules.orders.services"):
            line_service.add_line(open_order.id, product.id, 3)

        messages = [record.getMessage() for record in caplog.records]
        assert any("order_line.created" in m for m in messages)

    def test_rejection_is_logged_as_warning(
        self, caplog, line_service, shipped_order, product
    ):
        with caplog.at_level(logging.INFO, logger="modules.orders.services"):
            with pytest.raises(OrderAlreadyShipped):
                line_service.add_line(shipped_order.id, product.id, 1)

        warnings = [
            record.getMessage()
            for record in caplog.records
            if record.levelno == logging.WARNING
        ]
        assert any("order_line.rejected" in m and "order_shipped" in m for m in warnings)

    def test_operation_bound_in_context(
        self, caplog, shipment_service, open_order
    ):
        with caplog.at_level(logging.INFO, logger="modules.orders.repositories"):
            shipment_service.ship_order(open_order.id)

        saved = [r.getMessage() for r in caplog.records if "order.saved" in r.getMessage()]
        assert saved
        assert "ship_order" in saved[0]
