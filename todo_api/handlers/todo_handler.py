from mangum import Mangum

from todo_api.application import create_app
from todo_api.routers.todo_router import router as todo_router

app = create_app([(todo_router, "/todos", "Todos")], title="Todo Lambda")

handler = Mangum(app)
