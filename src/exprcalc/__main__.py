from exprcalc.cli import main

main()
