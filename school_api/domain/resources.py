"""Resource definitions: field sets, messages and lookups for each collection."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Optional

ID_FIELD = "id"
INVALID_FIELD_MESSAGE = "Campo '{field}' não é válido"
INVALID_BODY_MESSAGE = "Corpo da requisição deve ser um objeto JSON"


@dataclass(frozen=True)
class Lookup:
    """Secondary lookup exposed as ``GET <prefix>/<segment>/{value}``."""

    segment: str
    field: str
    not_found: str
    case_insensitive: bool = True


@dataclass(frozen=True)
class ResourceDefinition:
    name: str
    prefix: str
    filename: str
    tag: str
    label: str
    # campo obrigatorio -> mensagem de erro quando ausente
    required: dict[str, str]
    optional: tuple[str, ...] = ()
    not_found: str = "Registro não encontrado"
    lookups: tuple[Lookup, ...] = ()
    example: dict = field(default_factory=dict)
    prepare: Optional[Callable[[dict], dict]] = None

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(self.required)

    @property
    def allowed_fields(self) -> frozenset[str]:
        return frozenset((ID_FIELD, *self.required, *self.optional))

    def missing_message(self, name: str) -> str:
        return self.required.get(name) or f"{self.label} precisa ter um '{name}'"

    def lookup(self, segment: str) -> Lookup | None:
        for item in self.lookups:
            if item.segment == segment:
                return item
        return None

    def with_prepare(self, prepare: Callable[[dict], dict] | None) -> "ResourceDefinition":
        return replace(self, prepare=prepare)


STUDENTS = ResourceDefinition(
    name="students",
    prefix="/api/data/students",
    filename="students.json",
    tag="Estudantes",
    label="Estudante",
    required={
        "name": "Estudante precisa ter um 'nome'",
        "age": "Estudante precisa ter uma 'idade'",
        "parents": "Estudante precisa ter 'pais'",
        "phone_number": "Estudante precisa ter um 'número de telefone'",
        "special_needs": "Estudante precisa ter 'necessidades especiais'",
        "status": "Estudante precisa ter um 'status'",
    },
    not_found="Estudante não encontrado",
    lookups=(Lookup("name", "name", "Estudante não encontrado"),),
    example={
        "name": "Bingo Heeler",
        "age": "6",
        "parents": "Bandit Heeler e Chilli Heeler",
        "phone_number": "48 9696 5858",
        "special_needs": "Síndrome de Down",
        "status": "on",
    },
)

TEACHERS = ResourceDefinition(
    name="teachers",
    prefix="/api/data/teachers",
    filename="teachers.json",
    tag="Professores",
    label="Professor",
    required={
        "name": "Professor precisa ter um 'nome'",
        "school_disciplines": "Professor precisa ter 'disciplinas escolares'",
        "contact": "Professor precisa ter um 'contato'",
        "phone_number": "Professor precisa ter um 'número de telefone'",
        "status": "Professor precisa ter um 'status'",
    },
    not_found="Professor não encontrado",
    lookups=(Lookup("name", "name", "Professor não encontrado"),),
    example={
        "name": "Judite Heeler",
        "school_disciplines": "Artes, Português",
        "contact": "j.heeler@gmail",
        "phone_number": "48 9696 5858",
        "status": "on",
    },
)

USERS = ResourceDefinition(
    name="users",
    prefix="/api/data/users",
    filename="users.json",
    tag="Usuários",
    label="Usuário",
    required={
        "name": "Usuário precisa ter um 'nome'",
        "email": "Usuário precisa ter um 'email'",
        "user": "Usuário precisa ter um 'usuário'",
        "pwd": "Usuário precisa ter uma 'senha'",
        "level": "Usuário precisa ter um 'nível'",
        "status": "Usuário precisa ter um 'status'",
    },
    not_found="Usuario não encontrado",
    lookups=(
        Lookup("name", "name", "Usuario não encontrado"),
        Lookup("nome", "name", "Usuario não encontrado"),
    ),
    example={
        "name": "Andre Faria Ruaro",
        "email": "andre.ruaro@unesc.net",
        "user": "andre.ruaro",
        "pwd": "7a6cc1282c5f6ec0235acd2bfa780145aaskem5n",
        "level": "admin",
        "status": "on",
    },
)

APPOINTMENTS = ResourceDefinition(
    name="appointments",
    prefix="/api/data/appointments",
    filename="appointments.json",
    tag="Agendamentos",
    label="Agendamento",
    required={
        "specialty": "Agendamento precisa ter uma 'especialidade'",
        "comments": "Agendamento precisa ter 'comentários'",
        "date": "Agendamento precisa ter uma 'data'",
        "student": "Agendamento precisa ter um 'estudante'",
        "professional": "Agendamento precisa ter um 'profissional'",
    },
    not_found="Agendamento não encontrado",
    lookups=(
        Lookup("professional", "professional", "Nenhum agendamento encontrado para o profissional"),
        Lookup("date", "date", "Nenhum agendamento encontrado na data especificada", case_insensitive=False),
    ),
    example={
        "specialty": "Fisioterapeuta",
        "comments": "Realizar sessão",
        "date": "2023-08-15 16:00:00",
        "student": "Bingo Heeler",
        "professional": "Winton Blake",
    },
)

PROFESSIONALS = ResourceDefinition(
    name="professionals",
    prefix="/api/profissionais",
    filename="profissionais.json",
    tag="Profissionais",
    label="Profissional",
    required={
        "nome": "Profissional precisa ter um 'nome'",
        "client": "Profissional precisa ter um 'cliente'",
    },
    optional=("service", "date", "status", "comments"),
    not_found="Profissional não encontrado!",
    lookups=(Lookup("nome", "nome", "Profissional não encontrado!"),),
    example={
        "nome": "Marika",
        "client": "Radahn da Silva",
        "service": "Consulta de Fisioterapia",
        "date": "2024-10-05 14:00:00",
        "status": "on",
        "comments": "Cliente pediu alteração para horário da tarde",
    },
)

EVENTS = ResourceDefinition(
    name="events",
    prefix="/api/events",
    filename="events.json",
    tag="Eventos",
    label="Evento",
    required={
        "description": "Evento precisa ter uma 'descrição'",
    },
    optional=("comments", "date"),
    not_found="Evento não encontrado",
    lookups=(Lookup("date", "date", "Nenhum evento encontrado na data especificada", case_insensitive=False),),
    example={
        "description": "Evento de lançamento",
        "comments": "Comentários sobre o evento",
        "date": "2024-10-01 10:00:00",
    },
)

RESOURCES: tuple[ResourceDefinition, ...] = (
    STUDENTS,
    TEACHERS,
    USERS,
    APPOINTMENTS,
    PROFESSIONALS,
    EVENTS,
)


def get_resource(name: str) -> ResourceDefinition:
    for resource in RESOURCES:
        if resource.name == name:
            return resource
    raise KeyError(name)
