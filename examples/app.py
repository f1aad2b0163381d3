"""
Example driver for certbatch: template + names spreadsheet -> certificates.zip
"""

from pathlib import Path

from certbatch import CertificateError, CertificateSession, save_archive, suggest_font_color

HERE = Path(__file__).parent


def main():
    session = CertificateSession()

    template = session.upload_template((HERE / "template.png").read_bytes())
    names = session.upload_names(HERE / "name.xlsx")
    print(f"\n[Template] {template.width}x{template.height}px")
    print(f"[Names] {len(names)} loaded")

    # Name goes a little below the middle of the template
    position = session.move_position(0, template.height * 0.1)
    color = suggest_font_color(template, position)
    font = session.set_font(family="Georgia", size=56, color=color)
    print(f"[Position] ({position.x:.0f}, {position.y:.0f})")
    print(f"[Font] {font.family} {font.size}px {font.color}\n")

    def progress(done, total):
        print(f"[{done}/{total}] certificates rendered")

    try:
        archive = session.generate(progress=progress)
        path = save_archive(archive, HERE, session.config.archive_name)
    except CertificateError as e:
        print(f"Generation failed: {e}")
        return 1

    print(f"\nZipped: {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
