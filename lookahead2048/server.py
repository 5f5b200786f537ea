import os

from flask import Flask, request, jsonify
from flask_cors import CORS

from lookahead2048 import game
from lookahead2048.search import DEFAULT_DEPTH, select_best_move

DEPTH = int(os.environ.get("LOOKAHEAD_DEPTH", DEFAULT_DEPTH))
MAX_DEPTH = 6


def parse_board(payload):
    """
    Accepts either a dense grid ([[2, 0, ...], ...]) or a list of
    {"row": r, "column": c, "value": v} cells, 1-indexed.
    Returns (board, size).
    """
    if not isinstance(payload, list) or not payload:
        raise game.BoardFormatError("'board' must be a non-empty list")

    if all(isinstance(cell, dict) for cell in payload):
        try:
            cells = [((cell['row'], cell['column']), cell['value']) for cell in payload]
        except KeyError as e:
            raise game.BoardFormatError(f"Cell is missing {e}") from e
        board = game.Board.from_cells(cells)
        board.to_grid(game.BOARD_SIZE)
        return board, game.BOARD_SIZE

    board = game.Board.from_grid(payload)
    return board, len(payload)


def parse_depth(value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("'depth' must be an integer")
    if not 1 <= value <= MAX_DEPTH:
        raise ValueError(f"'depth' must be between 1 and {MAX_DEPTH}")
    return value


app = Flask(__name__)
CORS(app, resources={r"/*": {"origins": "*"}})


@app.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok', 'depth': DEPTH})


@app.route('/best-move', methods=['POST'])
def best_move():
    """Endpoint for the lookahead search's choice of move."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    try:
        board, size = parse_board(data.get('board'))
        depth = parse_depth(data.get('depth', DEPTH))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    try:
        move = select_best_move(board, depth, size)
        return jsonify({'move': None if move is None else move.value})
    except Exception as e:
        return jsonify({'error': str(e)}), 500


@app.route('/execute', methods=['POST'])
def execute_move():
    """Endpoint for simulating one move without spawning a tile."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    try:
        board, size = parse_board(data.get('board'))
        move = game.Move.parse(data.get('move'))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    try:
        score, result = game.execute(board, move, size)
        return jsonify({'score': int(score), 'board': result.to_grid(size).tolist()})
    except Exception as e:
        return jsonify({'error': str(e)}), 500


if __name__ == '__main__':
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", 5000))
    print(f"Search depth: {DEPTH}")
    print(f"Server starting on http://localhost:{port}")
    app.run(host=host, port=port, debug=False)
