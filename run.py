from pickem import create_app, db
from pickem.models import Game, Pick, PointValueSet, Season, Team, User, Week

app = create_app()


@app.shell_context_processor
def make_shell_context():
    return {
        "db": db,
        "User": User,
        "Season": Season,
        "Week": Week,
        "PointValueSet": PointValueSet,
        "Game": Game,
        "Pick": Pick,
        "Team": Team,
    }


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
