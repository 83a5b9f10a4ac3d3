#!/usr/bin/env python3
"""
Game session logger - records scoring events and level layouts as JSON
"""

import hashlib
import json
import os
from collections import Counter
from datetime import datetime

import numpy as np

import config
from maze_grid import CellKind

LOGGED_EVENTS = ('pellet', 'power', 'capture', 'life_lost', 'level_complete', 'game_over', 'restart')


class GameSessionLogger:
    def __init__(self, base_dir=None):
        self.base_dir = base_dir or config.SESSION_LOG_DIR
        self.session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.events = []
        self.maze_cache = {}  # Cache to avoid duplicate mazes
        self.final_state = {}

        # Create directory structure
        self._create_directories()

    def _create_directories(self):
        """Create necessary directories"""
        for directory in (self.base_dir,
                          os.path.join(self.base_dir, "sessions"),
                          os.path.join(self.base_dir, "mazes")):
            os.makedirs(directory, exist_ok=True)

    def attach(self, session):
        """Subscribe to a GameSession's events"""
        for kind in LOGGED_EVENTS:
            session.on_event(kind, lambda data, kind=kind: self.log_event(kind, data))
        session.on_event('level_complete', lambda data: self.log_maze(session.maze, data['level']))
        self.log_maze(session.maze, session.state.level)

    def log_event(self, kind, data):
        """Record one game event with a timestamp"""
        entry = {
            "kind": kind,
            "timestamp": datetime.now().isoformat(),
        }
        entry.update({key: self._serializable(value) for key, value in data.items()})
        self.events.append(entry)
        if 'score' in data:
            self.final_state['score'] = data['score']
        if 'level' in data:
            self.final_state['level'] = data['level']

    def log_maze(self, maze, level):
        """Save a level layout once per distinct maze"""
        maze_hash = self._get_maze_hash(maze.cells)
        if maze_hash in self.maze_cache:
            return maze_hash
        self.maze_cache[maze_hash] = level

        walls = maze.cells == CellKind.WALL
        maze_data = {
            "hash": maze_hash,
            "level": level,
            "size": f"{maze.height}x{maze.width}",
            "template": list(maze.template),
            "tunnel_rows": sorted(maze.tunnel_rows),
            "metadata": {
                "wall_density": float(np.mean(walls)),
                "path_density": float(1 - np.mean(walls)),
                "pellets": maze.count_pellets(),
            }
        }

        filepath = os.path.join(self.base_dir, "mazes", f"maze_{maze_hash}.json")
        with open(filepath, 'w') as f:
            json.dump(maze_data, f, indent=2)
        return maze_hash

    def _get_maze_hash(self, cells):
        """Generate unique hash for maze"""
        return hashlib.md5(np.array(cells).tobytes()).hexdigest()

    def _serializable(self, value):
        if hasattr(value, 'name') and not isinstance(value, str):
            return value.name
        if isinstance(value, (list, tuple)):
            return [self._serializable(v) for v in value]
        return value

    def summary(self):
        counts = Counter(event["kind"] for event in self.events)
        return {
            "events": dict(counts),
            "ghosts_captured": counts.get('capture', 0),
            "lives_lost": counts.get('life_lost', 0),
            "levels_completed": counts.get('level_complete', 0),
            "final_score": self.final_state.get('score', 0),
            "final_level": self.final_state.get('level', 1),
            "mazes_seen": len(self.maze_cache),
        }

    def save_session_summary(self):
        """Save session summary"""
        summary_data = {
            "session_id": self.session_id,
            "timestamp": datetime.now().isoformat(),
            "summary": self.summary(),
            "events": self.events,
        }

        filepath = os.path.join(self.base_dir, "sessions", f"session_summary_{self.session_id}.json")
        with open(filepath, 'w') as f:
            json.dump(summary_data, f, indent=2)

        print(f"Session summary saved: {filepath}")
        return filepath
