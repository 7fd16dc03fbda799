from evalsummary.summarization.example_client_adapter import ExampleClientAdapter


class TestExampleClientAdapter:
    def test_returns_default_response(self) -> None:
        adapter = ExampleClientAdapter()
        result = adapter.create_message(
            model="any", max_tokens=10, temperature=0.0, prompt="Hello"
        )
        assert result == ExampleClientAdapter.DEFAULT_RESPONSE

    def test_ignores_document(self) -> None:
        adapter = ExampleClientAdapter(api_key="sk-ant-anything")
        result = adapter.create_message(
            model="any", max_tokens=10, temperature=0.0, prompt="p", document=b"%PDF"
        )
        assert "## CONSTRUCTIVE FEEDBACK SUMMARY" in result
        assert "## POSITIVE COMMENTS" in result
        assert "## OVERALL SENTIMENT" in result
