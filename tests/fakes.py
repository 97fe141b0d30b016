import re
import uuid
from types import SimpleNamespace

from postgrest.exceptions import APIError
from supabase import AuthError


class FakeAuthError(AuthError):
    def __init__(self, message):
        Exception.__init__(self, message)
        self.message = message


def api_error(message="boom", code="XX000"):
    return APIError({"message": message, "code": code, "hint": None, "details": None})


_EMBED = re.compile(r"(\w+):(\w+)\(([^)]*)\)")


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.order_by = None
        self.limit_n = None

    # Lecturas
    def select(self, columns="*"):
        self.op = "select"
        self.columns = columns
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def ilike(self, column, pattern):
        regex = re.compile("^" + ".*".join(re.escape(p) for p in pattern.split("%")) + "$", re.IGNORECASE)
        self.filters.append(lambda row: bool(regex.match(str(row.get(column) or ""))))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    # Escrituras
    def insert(self, rows):
        self.op = "insert"
        self.payload = rows
        return self

    def update(self, data):
        self.op = "update"
        self.payload = data
        return self

    def upsert(self, rows, on_conflict=""):
        self.op = "upsert"
        self.payload = rows
        self.on_conflict = [c.strip() for c in on_conflict.split(",") if c.strip()]
        return self

    def delete(self):
        self.op = "delete"
        return self

    def _matches(self, row):
        return all(f(row) for f in self.filters)

    def _project(self, row):
        if self.columns.strip() == "*":
            return dict(row)
        embeds = _EMBED.findall(self.columns)
        plain = _EMBED.sub("", self.columns)
        campos = [c.strip() for c in plain.split(",") if c.strip()]
        resultado = dict(row) if "*" in campos else {c: row.get(c) for c in campos}
        for alias, tabla, columnas in embeds:
            relacionado = next((r for r in self.db.tables.get(tabla, []) if r.get("id") == row.get("alumno_id")), None)
            resultado[alias] = (
                {c.strip(): relacionado.get(c.strip()) for c in columnas.split(",")}
                if relacionado else None
            )
        return resultado

    def execute(self):
        self.db.calls.append((self.table, self.op))
        hook = self.db.hooks.pop((self.table, self.op), None)
        if hook is not None:
            hook()
        falla = self.db.failures.get((self.table, self.op))
        if falla is not None:
            raise falla

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "select":
            data = [r for r in rows if self._matches(r)]
            if self.order_by:
                column, desc = self.order_by
                data.sort(key=lambda r: (r.get(column) is None, r.get(column) or ""), reverse=desc)
            if self.limit_n is not None:
                data = data[:self.limit_n]
            return SimpleNamespace(data=[self._project(r) for r in data])

        if self.op == "insert":
            nuevos = self.payload if isinstance(self.payload, list) else [self.payload]
            creados = []
            for fila in nuevos:
                fila = {"id": str(uuid.uuid4()), "created_at": f"2024-01-01T00:00:{len(rows):02d}", **fila}
                rows.append(fila)
                creados.append(dict(fila))
            return SimpleNamespace(data=creados)

        if self.op == "update":
            actualizados = []
            for fila in rows:
                if self._matches(fila):
                    fila.update(self.payload)
                    actualizados.append(dict(fila))
            return SimpleNamespace(data=actualizados)

        if self.op == "upsert":
            resultado = []
            for fila in self.payload:
                existente = next(
                    (r for r in rows if all(r.get(c) == fila.get(c) for c in self.on_conflict)),
                    None
                )
                if existente is not None:
                    existente.update(fila)
                    resultado.append(dict(existente))
                else:
                    nueva = {"id": str(uuid.uuid4()), **fila}
                    rows.append(nueva)
                    resultado.append(dict(nueva))
            return SimpleNamespace(data=resultado)

        if self.op == "delete":
            borrados = [r for r in rows if self._matches(r)]
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=borrados)

        raise AssertionError(f"Operación desconocida {self.op}")


class FakeSubscription:
    def __init__(self, auth, callback):
        self.auth = auth
        self.callback = callback

    def unsubscribe(self):
        self.auth.listeners.remove(self.callback)


class FakeAdmin:
    def __init__(self, auth):
        self.auth = auth

    def sign_out(self, jwt, scope="global"):
        self.auth.tokens.pop(jwt, None)


class FakeAuth:
    def __init__(self):
        self.users = {}
        self.tokens = {}
        self.session = None
        self.listeners = []
        self.admin = FakeAdmin(self)

    def add_user(self, email, password):
        user = SimpleNamespace(id=str(uuid.uuid4()), email=email)
        self.users[email] = (password, user)
        return user

    def _emit(self, event):
        for callback in list(self.listeners):
            callback(event, self.session)

    def get_session(self):
        return self.session

    def get_user(self, jwt=None):
        user = self.tokens.get(jwt)
        if user is None:
            raise FakeAuthError("invalid JWT")
        return SimpleNamespace(user=user)

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return FakeSubscription(self, callback)

    def sign_in_with_password(self, credentials):
        password, user = self.users.get(credentials["email"], (None, None))
        if user is None or password != credentials["password"]:
            raise FakeAuthError("Invalid login credentials")
        token = f"token-{uuid.uuid4()}"
        self.tokens[token] = user
        self.session = SimpleNamespace(user=user, access_token=token)
        self._emit("SIGNED_IN")
        return SimpleNamespace(user=user, session=self.session)

    def sign_out(self):
        if self.session is not None:
            self.tokens.pop(self.session.access_token, None)
        self.session = None
        self._emit("SIGNED_OUT")


class FakeSupabase:
    """Cliente de Supabase en memoria: tablas como listas de dicts."""

    def __init__(self):
        self.tables = {}
        self.calls = []
        self.failures = {}
        self.hooks = {}
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)

    def fail(self, table, op, error=None):
        self.failures[(table, op)] = error or api_error()

    def on_execute(self, table, op, callback):
        """Ejecuta `callback` una vez, justo antes de la próxima operación (table, op)."""
        self.hooks[(table, op)] = callback

    def calls_to(self, table):
        return [op for t, op in self.calls if t == table]


def crear_usuario(supabase, email, role):
    user = supabase.auth.add_user(email, "secreto123")
    supabase.tables.setdefault("profiles", []).append({"id": user.id, "role": role})
    return user


def login(test_client, email):
    """Inicia sesión y deja el access token en los headers del cliente."""
    response = test_client.post("/auth/login", json={"email": email, "password": "secreto123"})
    if response.status_code == 200:
        test_client.headers["Authorization"] = f"Bearer {response.json()['access_token']}"
    return response


def alumno(id, apellido, nombre="Ana", curso="1º", division="A", estado="ACTIVO", dni=None, legajo=None):
    return {
        "id": id,
        "legajo": legajo or f"L-{id}",
        "nombre": nombre,
        "apellido": apellido,
        "dni": dni or f"40{id:0>6}",
        "curso": curso,
        "division": division,
        "estado": estado,
    }
