import argparse
import logging
import sys

import numpy as np

from PyQt5 import QtWidgets
from PyQt5.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QSpinBox, QDoubleSpinBox, QCheckBox, QLineEdit,
    QMessageBox
)

from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from .events import Gesture, gesture_for_button
from .exceptions import CurveError
from .session import EditSession, EditState
from .settings import EditorSettings

log = logging.getLogger("nurbs_designer.gui")

OVERLAYS = [
    ('show_points', 'Control points'),
    ('show_curve', 'Curve'),
    ('show_knots', 'Knots'),
    ('show_trace', 'de Boor trace'),
    ('show_demo_point', 'Demo point'),
]


class CurveDesigner(QMainWindow):
    def __init__(self, settings=None):
        super().__init__()
        self.setWindowTitle('NURBS Curve Designer')
        self.setGeometry(100, 100, 1200, 800)

        self.session = EditSession(settings)
        self._init_ui()

    def _init_ui(self):
        s = self.session.settings
        central = QWidget()
        self.setCentralWidget(central)
        layout = QHBoxLayout()
        central.setLayout(layout)

        left = QVBoxLayout()
        layout.addLayout(left, 0)

        left.addWidget(QLabel('Curve Order:'))
        self.spin_order = QSpinBox()
        self.spin_order.setRange(2, 20)
        self.spin_order.setValue(s.order)
        self.spin_order.valueChanged.connect(self.on_order_changed)
        left.addWidget(self.spin_order)

        left.addWidget(QLabel('Curve Resolution:'))
        self.spin_resolution = QSpinBox()
        self.spin_resolution.setRange(1, 5000)
        self.spin_resolution.setValue(s.resolution)
        self.spin_resolution.valueChanged.connect(self.on_resolution_changed)
        left.addWidget(self.spin_resolution)

        left.addWidget(QLabel('Selected Point Weight:'))
        self.spin_weight = QDoubleSpinBox()
        self.spin_weight.setDecimals(4)
        self.spin_weight.setRange(0.0001, 1e6)
        self.spin_weight.setSingleStep(0.1)
        self.spin_weight.setValue(1.0)
        self.spin_weight.valueChanged.connect(self.on_weight_changed)
        left.addWidget(self.spin_weight)

        left.addWidget(QLabel('Demo Parameter u:'))
        self.spin_demo = QDoubleSpinBox()
        self.spin_demo.setDecimals(4)
        self.spin_demo.setRange(0.0, 1.0)
        self.spin_demo.setSingleStep(0.01)
        self.spin_demo.setValue(s.demo_parameter)
        self.spin_demo.valueChanged.connect(self.on_demo_changed)
        left.addWidget(self.spin_demo)

        self.overlay_boxes = {}
        for name, label in OVERLAYS:
            box = QCheckBox(label)
            box.setChecked(getattr(s, name))
            box.toggled.connect(lambda checked, n=name: self.on_overlay_toggled(n, checked))
            left.addWidget(box)
            self.overlay_boxes[name] = box

        left.addWidget(QLabel('Knot Vector:'))
        self.knot_edit = QLineEdit()
        self.knot_edit.setReadOnly(True)
        left.addWidget(self.knot_edit)

        btn_insert_knot = QPushButton('Insert Knot (u value)')
        btn_insert_knot.clicked.connect(self.insert_knot_dialog)
        left.addWidget(btn_insert_knot)

        btn_remove = QPushButton('Remove Selected Point')
        btn_remove.clicked.connect(self.remove_selected)
        left.addWidget(btn_remove)

        btn_clear = QPushButton('Clear Curve')
        btn_clear.clicked.connect(self.clear_curve)
        left.addWidget(btn_clear)

        left.addWidget(QLabel('Left: select/drag  Right: add  Middle: remove'))
        left.addStretch()

        self.figure = Figure()
        self.canvas = FigureCanvas(self.figure)
        layout.addWidget(self.canvas, 1)
        self.ax = self.figure.add_subplot(111)
        self.figure.tight_layout()

        self.canvas.mpl_connect('button_press_event', self.on_canvas_press)
        self.canvas.mpl_connect('motion_notify_event', self.on_canvas_motion)
        self.canvas.mpl_connect('button_release_event', self.on_canvas_release)

        self.status = self.statusBar()
        self.status.showMessage('Ready')
        self.redraw()

    def map_to_data(self, event):
        if event.inaxes != self.ax or event.xdata is None or event.ydata is None:
            return None
        return (event.xdata, event.ydata)

    def dispatch(self, pos, gesture):
        try:
            self.session.handle(pos, gesture)
        except CurveError as e:
            log.warning('Edit failed: %s', e)
            QMessageBox.warning(self, 'Edit Failed', str(e))
        self.update_fields()
        self.redraw()

    def on_canvas_press(self, event):
        pos = self.map_to_data(event)
        if pos is None:
            return
        self.dispatch(pos, gesture_for_button(event.button, True))

    def on_canvas_motion(self, event):
        if self.session.state not in (EditState.DRAGGING_POINT, EditState.DRAGGING_KNOT):
            return
        pos = self.map_to_data(event)
        if pos is None:
            return
        self.dispatch(pos, Gesture.NONE)

    def on_canvas_release(self, event):
        gesture = gesture_for_button(event.button, False)
        if gesture is Gesture.NONE:
            return
        pos = self.map_to_data(event) or self.session.cursor
        self.dispatch(pos, gesture)

    def on_order_changed(self, v):
        self.session.set_order(v)
        self.update_fields()
        self.redraw()

    def on_resolution_changed(self, v):
        self.session.set_resolution(v)
        self.redraw()

    def on_weight_changed(self, val):
        try:
            self.session.set_selected_weight(float(val))
        except CurveError as e:
            log.warning('Weight rejected: %s', e)
            self.status.showMessage(str(e))
            return
        self.redraw()

    def on_demo_changed(self, val):
        self.session.set_demo_parameter(val)
        self.redraw()

    def on_overlay_toggled(self, name, checked):
        setattr(self.session.settings, name, bool(checked))
        self.redraw()

    def insert_knot_dialog(self):
        u, ok = QtWidgets.QInputDialog.getDouble(self, 'Insert Knot', 'u value (0-1):', 0.5, 0.0, 1.0, 4)
        if not ok:
            return
        try:
            inserted = self.session.insert_knot(float(u))
        except CurveError as e:
            QMessageBox.warning(self, 'Insertion Failed', f'Knot insertion failed: {str(e)}')
            return
        if not inserted:
            QMessageBox.information(self, 'Not Inserted', 'Need a valid curve and 0 < u < 1 to insert a knot')
        self.update_fields()
        self.redraw()

    def remove_selected(self):
        self.session.remove_selected()
        self.update_fields()
        self.redraw()

    def clear_curve(self):
        self.session.clear()
        self.update_fields()
        self.redraw()
        self.status.showMessage('Curve cleared')

    def update_fields(self):
        w = self.session.selected_weight()
        self.spin_weight.blockSignals(True)
        self.spin_weight.setEnabled(w is not None)
        if w is not None:
            self.spin_weight.setValue(w)
        self.spin_weight.blockSignals(False)
        knots = self.session.refresh_knots()
        self.knot_edit.setText(','.join([f'{k:.4f}' for k in knots]))
        n = len(self.session.points)
        self.status.showMessage(
            f'{n} points, order {self.session.effective_order} (requested {self.session.order}), '
            f'state {self.session.state.value}')

    def redraw(self):
        s = self.session.settings
        self.ax.clear()
        self.ax.set_aspect('equal', adjustable='box')
        self.ax.set_xlim(-s.view_extent, s.view_extent)
        self.ax.set_ylim(-s.view_extent, s.view_extent)
        self.ax.grid(True, linestyle='--', alpha=0.4)

        ctrl = self.session.control_points()
        if ctrl:
            pts = np.array(ctrl)
            self.ax.plot(pts[:, 0], pts[:, 1], marker='o', linestyle='--', linewidth=1, markersize=6,
                         color='darkblue', alpha=0.5)
            sel = self.session.points.selected_index
            if sel is not None:
                self.ax.plot([pts[sel, 0]], [pts[sel, 1]], marker='o', markersize=10,
                             markerfacecolor='none', color='red')

        samp = self.session.curve_samples()
        if samp:
            samp = np.array(samp)
            self.ax.plot(samp[:, 0], samp[:, 1], linestyle='-', linewidth=2.5, color='darkgreen')

        markers = self.session.knot_markers()
        if markers:
            axis = s.knot_axis
            x0, y0 = axis.origin
            self.ax.plot([x0, x0 + axis.length], [y0, y0], color='gray', linewidth=1)
            m = np.array(markers)
            self.ax.plot(m[:, 0], m[:, 1], linestyle='', marker='|', markersize=14, color='black')
            if self.session.active_knot is not None:
                mx, my = markers[self.session.active_knot]
                self.ax.plot([mx], [my], marker='|', markersize=18, color='red')

        for a, b in self.session.recursion_trace():
            self.ax.plot([a[0], b[0]], [a[1], b[1]], linestyle='-', linewidth=1, color='orange', alpha=0.8)

        demo = self.session.demo_point()
        if demo is not None:
            self.ax.plot([demo[0]], [demo[1]], marker='o', markersize=8, color='red')

        self.canvas.draw()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Interactive NURBS curve designer')
    parser.add_argument('--order', type=int, default=3)
    parser.add_argument('--resolution', type=int, default=100)
    parser.add_argument('--pick-radius', type=float, default=0.3)
    parser.add_argument('--trace', action='store_true', help='show the de Boor construction')
    parser.add_argument('--log-level', default='WARNING')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING),
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    settings = EditorSettings(order=args.order, resolution=args.resolution, pick_radius=args.pick_radius,
                              show_trace=args.trace, show_demo_point=args.trace)
    app = QApplication(sys.argv[:1])
    win = CurveDesigner(settings)
    win.show()
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
