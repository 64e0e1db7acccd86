#!/usr/bin/env python3
"""
Jeopardy Web Server
===================

Serves a six-category trivia board. Categories and clues come from a
jService-style API; clicking a cell shows its question, then its answer.

Usage:
    python jeopardy_server.py

Then open http://localhost:8080 in your browser.
"""

from flask import Flask, render_template, jsonify

import server_settings
import board_handler
from board_constants import NUM_CATEGORIES, NUM_QUESTIONS_PER_CAT

print(f"Using clue API: {server_settings.API_BASE_URL}")

app = Flask(__name__)

# Register board Blueprint (all /board/* routes)
from board_routes import board_bp
app.register_blueprint(board_bp, url_prefix='/board')


@app.route('/')
def index():
    """Serve the main page"""
    return render_template(
        'index.html',
        num_categories=NUM_CATEGORIES,
        num_questions=NUM_QUESTIONS_PER_CAT,
    )


@app.route('/status')
def status():
    """Return server status: which API is in use and how many games are live."""
    return jsonify({
        'api_base_url': server_settings.API_BASE_URL,
        'games': board_handler.game_count(),
        'connected': True
    })


if __name__ == '__main__':
    print("Starting Jeopardy Server...")
    print(f"Open http://localhost:{server_settings.PORT} in your browser")
    print(f"Or from other devices on your network: http://<your-ip>:{server_settings.PORT}")
    app.run(debug=True, port=server_settings.PORT, host='0.0.0.0')
