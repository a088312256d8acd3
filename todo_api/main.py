from todo_api.application import create_app

app = create_app()
