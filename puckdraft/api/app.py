"""Flask API for the mock draft room."""
import json
import logging
import traceback
from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from puckdraft.models.draft import DraftTab, LeagueSettings
from puckdraft.services import draft_config
from puckdraft.services.draft_order import DraftOrder
from puckdraft.services.draft_scheduler import DraftScheduler
from puckdraft.services.draft_service import DraftService
from puckdraft.services.errors import DraftConfigError, DraftError, PlayerNotAvailableError
from puckdraft.services.fantasy_scoring import ScoringWeights, apply_fantasy_points, score_players
from puckdraft.services.league_setup import filter_draftable_players
from puckdraft.services.player_loader import PlayerLoader
from puckdraft.services.team_service import TeamService

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)

# Initialize services
draft_service = DraftService()
draft_scheduler = DraftScheduler(draft_service)
player_loader = PlayerLoader()


# Global error handlers to ensure all errors return JSON
@app.errorhandler(404)
def not_found(error):
    return jsonify({
        'success': False,
        'error': 'Not found',
        'message': 'The requested resource was not found'
    }), 404


@app.errorhandler(PlayerNotAvailableError)
def handle_player_not_available(e):
    return jsonify({
        'success': False,
        'error': type(e).__name__,
        'message': str(e)
    }), 404


@app.errorhandler(DraftError)
def handle_draft_error(e):
    return jsonify({
        'success': False,
        'error': type(e).__name__,
        'message': str(e)
    }), 400


@app.errorhandler(Exception)
def handle_exception(e):
    if isinstance(e, HTTPException):
        return jsonify({
            'success': False,
            'error': e.name,
            'message': e.description
        }), e.code
    logger.exception("Unhandled error in %s", request.path)
    return jsonify({
        'success': False,
        'error': type(e).__name__,
        'message': str(e),
        'traceback': traceback.format_exc() if app.debug else None
    }), 500


def start_background_scheduler():
    """Start the pick timer and CPU pick pacing."""
    draft_scheduler.start()


def _scoring_weights(data):
    try:
        return ScoringWeights.from_dict(data)
    except (AttributeError, TypeError, ValueError) as e:
        raise DraftConfigError(f"Invalid scoring weights: {e}") from e


def _draft_response(state, **extra):
    body = {
        'success': True,
        'draft': state.to_dict(),
        'draft_complete': state.is_draft_complete,
    }
    body.update(extra)
    return jsonify(body)


@app.route('/api/draft/state', methods=['GET'])
def get_draft_state():
    """Read-only snapshot of the draft."""
    state = draft_service.get_state()
    pick_info = DraftOrder.get_current_pick_info(state.current_pick_index, state.draft_order)
    return _draft_response(
        state,
        is_user_turn=pick_info.is_user_turn,
        next_picks=[pick.to_dict() for pick in pick_info.next_picks],
        picks_until_user_turn=DraftOrder.picks_until_user_turn(state.current_pick_index, state.draft_order),
        draft_error=draft_scheduler.last_error,
    )


@app.route('/api/league/initialize', methods=['POST'])
def initialize_league():
    """
    Set up a league.

    Body: {"settings": {...}, "players": [...]} or {"settings": {...}, "filename": "players.json"}.
    Optional "scoring_weights" fills in fantasy points before the draft.
    """
    data = request.get_json(silent=True) or {}
    try:
        settings = LeagueSettings.from_dict(data.get('settings') or {})
    except (AttributeError, TypeError, ValueError) as e:
        raise DraftConfigError(f"Invalid league settings: {e}") from e

    if 'players' in data:
        players = PlayerLoader.players_from_records(data['players'])
    elif 'filename' in data:
        players = player_loader.load_players(data['filename'])
    else:
        return jsonify({
            'success': False,
            'message': 'Provide either players or filename'
        }), 400

    draftable = filter_draftable_players(players)
    if 'scoring_weights' in data:
        draftable = apply_fantasy_points(draftable, _scoring_weights(data['scoring_weights']))

    state = draft_service.initialize_league(settings, draftable)
    return _draft_response(
        state,
        message=f"League initialized with {len(draftable)} draftable players"
    )


@app.route('/api/draft/start', methods=['POST'])
def start_draft():
    state = draft_service.get_state()
    if state.league_settings is None:
        return jsonify({
            'success': False,
            'message': 'No league initialized'
        }), 400
    return _draft_response(draft_service.start_draft())


@app.route('/api/draft/pick', methods=['POST'])
def make_pick():
    """Make the user's pick."""
    data = request.get_json(silent=True) or {}
    player_id = data.get('player_id')
    if player_id is None:
        return jsonify({
            'success': False,
            'message': 'player_id is required'
        }), 400

    pick_info = draft_service.get_current_pick_info()
    if pick_info.current_pick is not None and not pick_info.is_user_turn:
        return jsonify({
            'success': False,
            'message': 'It is not your turn to pick'
        }), 400

    return _draft_response(draft_service.make_pick(str(player_id)))


@app.route('/api/draft/tab', methods=['POST'])
def change_tab():
    data = request.get_json(silent=True) or {}
    tab = data.get('tab')
    if tab not in {t.value for t in DraftTab}:
        return jsonify({
            'success': False,
            'message': f"Unknown tab: {tab}"
        }), 400
    return _draft_response(draft_service.change_tab(tab))


@app.route('/api/draft/reset', methods=['POST'])
def reset_draft():
    """Throw away the league and every pick."""
    return _draft_response(draft_service.reset_draft(), message='Draft reset')


@app.route('/api/draft/my-team', methods=['GET'])
def get_my_team():
    state = draft_service.get_state()
    user_team = state.user_team()
    if user_team is None:
        return jsonify({
            'success': False,
            'message': 'No active draft'
        }), 404
    roster_config = state.league_settings.roster_config
    return jsonify({
        'success': True,
        'team': user_team.to_dict(),
        'slots': TeamService.get_slot_breakdown(user_team, roster_config),
        'completion': TeamService.get_roster_completion(user_team, roster_config),
    })


@app.route('/api/recommendations', methods=['GET'])
def get_recommendations():
    """Top picks for the user at the current pick."""
    top_n = request.args.get('top_n', default=draft_config.DEFAULT_RECOMMENDATION_COUNT, type=int)
    recommendations = draft_service.get_recommendations(top_n=top_n)
    return jsonify({
        'success': True,
        'recommendations': [rec.to_dict() for rec in recommendations]
    })


@app.route('/api/players/score', methods=['POST'])
def score_player_table():
    """Fantasy points table for a list of provider records."""
    data = request.get_json(silent=True) or {}
    players = PlayerLoader.players_from_records(data.get('players', []))
    table = score_players(players, _scoring_weights(data.get('weights')))
    # to_json writes NaN as null and numpy scalars as plain numbers
    rows = json.loads(table.to_json(orient='records'))
    return jsonify({
        'success': True,
        'count': len(rows),
        'players': rows
    })
