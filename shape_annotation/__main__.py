from shape_annotation.cli import main

main()
