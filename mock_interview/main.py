from mock_interview.interface.api.main import create_app

app = create_app()
