"""
Baby Brain Inspector - PyQt6 window around a Conversation

Left: chat with the brain
Right: hormone bars, hormone history and the strongest associations
"""

import logging
import sys
from datetime import datetime
from typing import Dict, Optional

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QTextEdit, QLineEdit, QPushButton, QLabel, QGroupBox,
    QSplitter, QTableWidget, QTableWidgetItem, QHeaderView
)
from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QColor, QFont, QLinearGradient, QPainter, QPalette, QTextCursor

from babybrain import BrainPersistence, Conversation, CycleResult, setup_logging
from babybrain.persistence import DEFAULT_BRAIN_PATH
from babybrain.modulator import HORMONES

from .graph_widget import HORMONE_QCOLORS, HormoneGraphWidget

logger = logging.getLogger(__name__)


class HormonePanel(QWidget):
    """Bar chart of hormone levels."""

    def __init__(self):
        super().__init__()
        self.levels: Dict[str, float] = {}
        self.setMinimumHeight(120)

    def update_data(self, levels):
        self.levels = dict(levels or {})
        self.update()

    def paintEvent(self, event):
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        p.fillRect(self.rect(), QColor(15, 15, 25))

        if not self.levels:
            p.setPen(QColor(100, 100, 100))
            p.drawText(10, 20, "No hormone data")
            return

        w = self.width()
        h = self.height()
        bar_w = (w - 10) / len(HORMONES)

        p.setFont(QFont("Arial", 7))

        for i, name in enumerate(HORMONES):
            val = self.levels.get(name, 0.0)
            x = 5 + i * bar_w
            bh = val * (h - 25)

            color = HORMONE_QCOLORS[name]

            gradient = QLinearGradient(x, h - bh, x, h)
            gradient.setColorAt(0, color)
            gradient.setColorAt(1, color.darker(200))

            p.fillRect(QRectF(x, h - bh - 15, bar_w - 2, bh), gradient)

            p.setPen(QColor(230, 230, 230))
            p.drawText(QRectF(x, h - 12, bar_w, 12), Qt.AlignmentFlag.AlignCenter, name[:4])


class SynapseTable(QTableWidget):
    """Strongest associations, by absolute signed weight."""

    COLUMNS = ("Word", "Word", "Weight", "Transmitter")

    def __init__(self, limit: int = 15):
        super().__init__(0, len(self.COLUMNS))
        self.limit = limit
        self.setHorizontalHeaderLabels(list(self.COLUMNS))
        self.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.verticalHeader().setVisible(False)
        self.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)

    def update_data(self, brain):
        rows = brain.strongest_synapses(self.limit)
        self.setRowCount(len(rows))
        for row, ((a, b), syn) in enumerate(rows):
            cells = (a, b, f"{syn.signed_weight:+.3f}", str(syn.neurotransmitter))
            for col, text in enumerate(cells):
                self.setItem(row, col, QTableWidgetItem(text))


class BrainInspector(QMainWindow):
    """Chat window plus live view of the brain's state."""

    def __init__(self, conversation: Optional[Conversation] = None, brain_path: str = DEFAULT_BRAIN_PATH):
        super().__init__()
        if conversation is None:
            conversation = Conversation(persistence=BrainPersistence(brain_path))
        self.conversation = conversation
        self.conversation.add_observer(self.on_cycle)
        self.setup_ui()
        self.refresh()

    def setup_ui(self):
        self.setWindowTitle("Baby Brain Inspector")
        self.setMinimumSize(900, 600)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        # Left - chat
        chat = QWidget()
        chat_layout = QVBoxLayout(chat)

        self.chat_history = QTextEdit()
        self.chat_history.setReadOnly(True)
        self.chat_history.setStyleSheet("""
            QTextEdit {
                background-color: #1e1e1e;
                color: #e0e0e0;
                border: 1px solid #444;
                border-radius: 5px;
                padding: 10px;
                font-family: 'Consolas', 'Monaco', monospace;
                font-size: 13px;
            }
        """)

        input_layout = QHBoxLayout()
        self.input_field = QLineEdit()
        self.input_field.setPlaceholderText("Parle-lui...")
        self.input_field.returnPressed.connect(self.send_message)

        self.send_btn = QPushButton("Send")
        self.send_btn.clicked.connect(self.send_message)

        input_layout.addWidget(self.input_field)
        input_layout.addWidget(self.send_btn)

        self.status_label = QLabel("Ready")
        self.status_label.setStyleSheet("color: #888; font-size: 11px;")

        chat_layout.addWidget(self.chat_history)
        chat_layout.addLayout(input_layout)
        chat_layout.addWidget(self.status_label)

        # Right - state
        state = QWidget()
        state_layout = QVBoxLayout(state)

        hormone_group = QGroupBox("Hormones")
        hormone_layout = QVBoxLayout(hormone_group)
        self.hormone_panel = HormonePanel()
        self.hormone_graph = HormoneGraphWidget()
        hormone_layout.addWidget(self.hormone_panel)
        hormone_layout.addWidget(self.hormone_graph)

        synapse_group = QGroupBox("Strongest associations")
        synapse_layout = QVBoxLayout(synapse_group)
        self.synapse_table = SynapseTable()
        synapse_layout.addWidget(self.synapse_table)

        self.network_label = QLabel()
        self.network_label.setStyleSheet("color: #aaa;")

        state_layout.addWidget(hormone_group)
        state_layout.addWidget(synapse_group)
        state_layout.addWidget(self.network_label)

        splitter.addWidget(chat)
        splitter.addWidget(state)
        splitter.setSizes([500, 400])
        self.setCentralWidget(splitter)

        self.append_system("Bébé neuronal réveillé. Parle-lui.")

    def send_message(self):
        text = self.input_field.text().strip()
        if not text:
            return

        self.input_field.clear()
        self.append_message("Toi", text, "#64B5F6")

        result = self.conversation.handle(text)
        if result is None:
            return

        if result.command is not None:
            self.append_system(result.reply)
            if result.command == "reset":
                self.hormone_graph.clear()
            self.refresh()
        else:
            self.append_message(f"Lui [{result.mood}]", result.reply, "#81C784")

    def on_cycle(self, result: CycleResult):
        self.hormone_graph.add_data_point(self.conversation.brain.modulator.levels())
        self.status_label.setText(
            f"Mood: {result.mood} | Ticks: {result.ticks} | Spikes: {result.spikes}"
        )
        self.refresh()

    def refresh(self):
        brain = self.conversation.brain
        data = brain.get_dashboard_data()
        self.hormone_panel.update_data(data['chemicals'])
        self.synapse_table.update_data(brain)
        self.network_label.setText(
            f"Neurons: {data['neurons']['total']} | Synapses: {data['synapses']['total']} | "
            f"Ticks: {data['ticks']}"
        )

    def append_message(self, sender: str, text: str, color: str):
        timestamp = datetime.now().strftime("%H:%M:%S")
        html = f'<p><span style="color: #888;">[{timestamp}]</span> <b style="color: {color};">{sender}:</b> {text}</p>'
        self.chat_history.append(html)
        self.chat_history.moveCursor(QTextCursor.MoveOperation.End)

    def append_system(self, text: str):
        html = f'<p style="color: #FFB74D; font-style: italic;">{text}</p>'
        self.chat_history.append(html)

    def closeEvent(self, event):
        """Save the brain on close."""
        path = self.conversation.save()
        if path:
            logger.info("Brain saved to %s", path)
        event.accept()


def main(brain_path: str = DEFAULT_BRAIN_PATH):
    setup_logging("INFO")
    app = QApplication(sys.argv)
    app.setStyle('Fusion')

    # Dark palette
    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(30, 30, 30))
    palette.setColor(QPalette.ColorRole.WindowText, QColor(224, 224, 224))
    palette.setColor(QPalette.ColorRole.Base, QColor(42, 42, 42))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor(30, 30, 30))
    palette.setColor(QPalette.ColorRole.Text, QColor(224, 224, 224))
    palette.setColor(QPalette.ColorRole.Button, QColor(51, 51, 51))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor(224, 224, 224))
    palette.setColor(QPalette.ColorRole.Highlight, QColor(76, 175, 80))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor(255, 255, 255))
    app.setPalette(palette)

    window = BrainInspector(brain_path=brain_path)
    window.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
