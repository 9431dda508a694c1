"""
Общие фикстуры тестов генератора
"""

import copy

import pytest

SAMPLE_SPEC = {
    "openapi": "3.0.0",
    "info": {"title": "Test API", "version": "1.0.0"},
    "components": {
        "schemas": {
            "ApplicationDto": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string"},
                },
            },
            "ApplicationDtoCreate": {
                "type": "object",
                "properties": {"name": {"type": "string"}},
                "required": ["name"],
            },
            "ApplicationDtoUpdate": {
                "type": "object",
                "properties": {"name": {"type": "string"}},
            },
            "PageNodeDto": {"type": "object"},
        }
    },
    "paths": {
        "/application": {
            "get": {
                "operationId": "application_findAll",
                "description": "Список приложений",
                "parameters": [
                    {"name": "page", "in": "query", "schema": {"type": "integer"}},
                    {"name": "search", "in": "query", "schema": {"type": "string"}},
                ],
                "responses": {
                    "default": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/ApplicationDto"}
                            }
                        },
                    }
                },
            },
            "post": {
                "operationId": "application_create",
                "summary": "Создание приложения",
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {
                                "$ref": "#/components/schemas/ApplicationDtoCreate"
                            }
                        }
                    }
                },
                "responses": {
                    "default": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/ApplicationDto"}
                            }
                        },
                    }
                },
            },
        },
        "/application/{id}": {
            "get": {
                "operationId": "application_findOne",
                "parameters": [
                    {
                        "name": "id",
                        "in": "path",
                        "required": True,
                        "schema": {"type": "integer"},
                    }
                ],
                "responses": {
                    "default": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/ApplicationDto"}
                            }
                        },
                    }
                },
            },
            "put": {
                "operationId": "application_update",
                "parameters": [
                    {
                        "name": "id",
                        "in": "path",
                        "required": True,
                        "schema": {"type": "integer"},
                    }
                ],
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {
                                "$ref": "#/components/schemas/ApplicationDtoUpdate"
                            }
                        }
                    }
                },
                "responses": {"200": {"description": "OK"}},
            },
            "delete": {
                "operationId": "application_remove",
                "parameters": [
                    {
                        "name": "id",
                        "in": "path",
                        "required": True,
                        "schema": {"type": "integer"},
                    }
                ],
                "responses": {"200": {"description": "OK"}},
            },
        },
        "/page-node/{typeId}/{id}": {
            "get": {
                "operationId": "pageNode_findOne",
                "parameters": [
                    {
                        "name": "typeId",
                        "in": "path",
                        "required": True,
                        "schema": {"type": "integer"},
                    },
                    {
                        "name": "id",
                        "in": "path",
                        "required": True,
                        "schema": {"type": "integer"},
                    },
                ],
                "responses": {
                    "default": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/PageNodeDto"}
                            }
                        },
                    }
                },
            }
        },
    },
}


@pytest.fixture
def sample_spec():
    """Документ с контроллерами application и pageNode"""
    return copy.deepcopy(SAMPLE_SPEC)


@pytest.fixture(scope="session")
def shared_spec():
    """Тот же документ для фикстур с широкой областью"""
    return copy.deepcopy(SAMPLE_SPEC)
