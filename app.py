from flask import Flask, redirect, url_for

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from roguekey.config import config
from rogue_routes import rogue_bp, init_rogue_bp


def open_db(path=None):
    path = config.db_path if path is None else path
    if path == ':memory:':
        return TinyDB(storage=MemoryStorage)    #Memory DB
    return TinyDB(path)                         #Storage DB


def create_app(db=None):
    app = Flask(__name__)
    app.secret_key = config.secret_key

    if db is None:
        db = open_db()
    init_rogue_bp(db.table("rogue"))
    app.register_blueprint(rogue_bp)

    @app.route("/")
    def main():
        return redirect(url_for('rogue.state'))

    return app


app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
