"""Teste de integração: importação CSV, cadastro e painel pela API."""

from fastapi.testclient import TestClient

import main


def test_fluxo_importacao_cadastro_painel(csv_valido, csv_misto):
    cliente = TestClient(main.app)

    resposta = cliente.post(
        "/api/v1/students/import",
        files=[
            ("files", ("turma_a.csv", csv_valido.encode("utf-8"), "text/csv")),
            ("files", ("turma_b.csv", csv_misto.encode("utf-8"), "text/csv")),
        ],
        headers={"X-User-Id": "prof-1"},
    )

    assert resposta.status_code == 200
    resultado = resposta.json()
    assert resultado["totalRows"] == 5
    assert len(resultado["successful"]) == 4
    assert len(resultado["failed"]) == 1
    assert resultado["failed"][0]["rowData"] == ["", "bad-email", "150", "", "2024-13-40"]
    assert [erro["message"] for erro in resultado["failed"][0]["errors"]] == [
        "Name is required",
        "Email is not valid",
        "Grade must be between 0 and 100",
        "Course is required",
        "Enrollment date is not valid (use YYYY-MM-DD format)",
    ]
    assert [arquivo["file"] for arquivo in resultado["files"]] == ["turma_a.csv", "turma_b.csv"]

    listagem = cliente.get("/api/v1/students", params={"q": "biology"}).json()
    assert sorted(estudante["name"] for estudante in listagem) == ["Jane Doe", "Smith, Ann"]

    id_jane = next(e["id"] for e in listagem if e["name"] == "Jane Doe")
    assert cliente.get(f"/api/v1/students/{id_jane}").json()["createdBy"] == "prof-1"

    resumo = cliente.get("/api/v1/analytics/summary").json()
    assert resumo["totalStudents"] == 4
    assert [item["name"] for item in resumo["topPerformers"]] == ["Jane Doe"]
    assert [item["name"] for item in resumo["needsImprovement"]] == ["Mary Poe"]

    assert cliente.delete(f"/api/v1/students/{id_jane}").status_code == 200
    assert cliente.get(f"/api/v1/students/{id_jane}").status_code == 404

    exportado = cliente.get("/api/v1/students/export", params={"format": "csv"})
    assert exportado.status_code == 200
    assert exportado.text.count("\n") == 4


def test_fluxo_importacao_sem_arquivos():
    resposta = TestClient(main.app).post("/api/v1/students/import")

    assert resposta.status_code == 400


def test_fluxo_cadastro_manual_invalido():
    resposta = TestClient(main.app).post(
        "/api/v1/students",
        json={"name": "Ana", "email": "ana@", "grade": 50, "course": "Art", "enrollmentDate": "2024-02-30"},
    )

    assert resposta.status_code == 422
    assert [erro["field"] for erro in resposta.json()["detail"]["errors"]] == ["email", "enrollmentDate"]
