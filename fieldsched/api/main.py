"""
FastAPI app del secuenciador de tareas.

Capa API HTTP sobre el caso de uso; la lógica vive en application/ y core/.
"""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fieldsched.api.router import router
from fieldsched.application.config import configure_logging

configure_logging()

app = FastAPI(
    title="Fieldsched Sequencer API",
    description="Secuenciación diaria de tareas por técnico",
    version="1.0.0",
)

# Orígenes permitidos separados por coma; por defecto el servidor de desarrollo de la UI.
origins = [
    o.strip()
    for o in os.getenv("FIELDSCHED_CORS_ORIGINS", "http://localhost:5173").split(",")
    if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
def root():
    """Endpoint raíz"""
    return {"message": "Fieldsched Sequencer API", "status": "ok"}


# Bloque para ejecutar con uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
