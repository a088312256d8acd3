from mangum import Mangum

from todo_api.application import create_app
from todo_api.routers.auth_router import router as auth_router

app = create_app([(auth_router, "", "Auth")], title="Auth Lambda")

handler = Mangum(app)
