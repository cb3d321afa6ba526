class TestMetrics:
    def test_metrics_endpoint_exists(self, client):
        """Test the metrics endpoint is exposed."""
        resp = client.get("/metrics")
        assert resp.status_code == 200
        assert "http_requests_total" in resp.text

    def test_timeline_requests_are_counted(self, client):
        """Test timeline requests show up in the request metrics."""
        client.get("/timeline/buckets")
        resp = client.get("/metrics")
        assert 'handler="/timeline/buckets"' in resp.text
        assert "http_request_duration_seconds" in resp.text
